# ============================================================================
# FILE: tests/unit/test_pipeline.py
# ============================================================================
"""
End-to-end tests for MedicationLabelAnalyzer on in-memory adapters
"""

import pytest

from medication_scan import MedicationLabelAnalyzer, SourceFile, create_analyzer
from medication_scan.extractors.azure_read import AzureReadEngine
from medication_scan.utils.exceptions import EngineSubmitError, OcrFailedError
from medication_scan.vocabulary.rxnav import RxNavClient
from tests.fakes import FakeVocabulary, ScriptedEngine


@pytest.fixture
def make_analyzer(make_client):
    def _make(engine, vocabulary):
        return MedicationLabelAnalyzer(ocr_client=make_client(engine), vocabulary=vocabulary)
    return _make


@pytest.mark.asyncio
async def test_tylenol_label(make_analyzer, tylenol_label_pages):
    engine = ScriptedEngine(pages_by_data={b"tylenol": tylenol_label_pages})
    analyzer = make_analyzer(engine, FakeVocabulary(known={"tylenol extra strength"}))

    analysis = await analyzer.analyze_medication_images([SourceFile(b"tylenol", "tylenol.jpg")])

    assert analysis.to_dict() == {
        "medications": [
            {
                "name": "tylenol extra strength",
                "dosage": 500.0,
                "measurement": "mg",
                "ocrLines": ["Tylenol Extra Strength 500 mg tablet"],
            }
        ]
    }


@pytest.mark.asyncio
async def test_partial_ocr_failure_still_returns(make_analyzer, tylenol_label_pages, aspirin_label_pages):
    engine = ScriptedEngine(
        pages_by_data={b"one": tylenol_label_pages, b"three": aspirin_label_pages},
        submit_errors={b"two": EngineSubmitError("unsupported format", status=400)},
    )
    analyzer = make_analyzer(engine, FakeVocabulary(known={"tylenol extra strength", "aspirin"}))
    files = [
        SourceFile(b"one", "one.jpg"),
        SourceFile(b"two", "two.heic"),
        SourceFile(b"three", "three.jpg"),
    ]

    analysis = await analyzer.analyze_medication_images(files)

    assert [m.name for m in analysis.medications] == ["tylenol extra strength", "aspirin"]


@pytest.mark.asyncio
async def test_all_files_failed(make_analyzer):
    engine = ScriptedEngine(submit_errors={b"one": EngineSubmitError("down", status=503)})
    vocabulary = FakeVocabulary()
    analyzer = make_analyzer(engine, vocabulary)

    with pytest.raises(OcrFailedError):
        await analyzer.analyze_medication_images([SourceFile(b"one", "one.jpg")])

    assert vocabulary.calls == []


@pytest.mark.asyncio
async def test_no_files(make_analyzer):
    analyzer = make_analyzer(ScriptedEngine(), FakeVocabulary())

    analysis = await analyzer.analyze_medication_images([])

    assert analysis.to_dict() == {"medications": []}


@pytest.mark.asyncio
async def test_close_releases_adapters(make_analyzer):
    engine = ScriptedEngine()
    vocabulary = FakeVocabulary()
    analyzer = make_analyzer(engine, vocabulary)

    await analyzer.close()

    assert engine.closed
    assert vocabulary.closed


def test_create_analyzer_wiring(ocr_config):
    analyzer = create_analyzer(ocr_config=ocr_config)

    assert isinstance(analyzer.ocr_client.engine, AzureReadEngine)
    assert analyzer.ocr_client.settings is ocr_config
    assert isinstance(analyzer.vocabulary, RxNavClient)
