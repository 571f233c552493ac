# ============================================================================
# src/medication_scan/core/pipeline.py
# ============================================================================
"""
Medication Label Pipeline

files -> batch OCR -> normalized corpus -> candidates + dosages
      -> vocabulary resolution -> medication list

Raises only when no file produced any OCR text; every other failure
(single files, single lookups) degrades to a partial result.
"""

import logging
from typing import Any, Iterable, Optional

from .aggregation import resolve_and_aggregate
from .models import MedicationAnalysis, SourceFile
from ..config.ocr_config import OcrSettings
from ..config.vocabulary_config import VocabularySettings
from ..extractors.azure_read import AzureReadEngine
from ..extractors.ocr_client import OcrJobClient
from ..parsing.candidates import extract_candidates
from ..parsing.dosage import extract_dosages
from ..parsing.text_normalizer import build_corpus
from ..utils.logging import log_performance
from ..vocabulary.rxnav import RxNavClient

logger = logging.getLogger(__name__)


class MedicationLabelAnalyzer:
    """
    Caller-facing entry point.

    Args:
        ocr_client: OCR job client used for the batch
        vocabulary: Drug vocabulary with `async search(name)`
    """

    def __init__(self, ocr_client: OcrJobClient, vocabulary: Any):
        self.ocr_client = ocr_client
        self.vocabulary = vocabulary
        self.logger = logging.getLogger(__name__)

    @log_performance(logger, "Medication label analysis")
    async def analyze_medication_images(
        self,
        files: Iterable[SourceFile],
        config: Optional[OcrSettings] = None
    ) -> MedicationAnalysis:
        """
        Extract medications from label photos or PDFs.

        Args:
            files: Source files
            config: Optional OCR settings override for this call

        Returns:
            MedicationAnalysis with one entry per recognized drug name
        """
        files = list(files)
        results = await self.ocr_client.analyze_batch(files, config)

        corpus = build_corpus(results)
        candidates = extract_candidates(corpus)
        dosages = extract_dosages(corpus)
        self.logger.info(
            f"{len(results)} of {len(files)} file(s) read: {len(corpus)} lines, "
            f"{len(candidates)} candidate(s), {len(dosages)} dosage mention(s)"
        )

        medications = await resolve_and_aggregate(candidates, dosages, results, self.vocabulary)
        return MedicationAnalysis(medications=medications)

    async def close(self):
        await self.ocr_client.engine.close()
        close = getattr(self.vocabulary, "close", None)
        if close is not None:
            await close()


def create_analyzer(
    ocr_config: Optional[OcrSettings] = None,
    vocabulary_config: Optional[VocabularySettings] = None
) -> MedicationLabelAnalyzer:
    """
    Build an analyzer wired to Azure Read and RxNav.

    Args:
        ocr_config: OCR settings (defaults to environment)
        vocabulary_config: RxNav settings (defaults to environment)
    """
    engine = AzureReadEngine(ocr_config)
    return MedicationLabelAnalyzer(
        ocr_client=OcrJobClient(engine, settings=ocr_config),
        vocabulary=RxNavClient(vocabulary_config),
    )
