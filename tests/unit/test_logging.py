# ============================================================================
# FILE: tests/unit/test_logging.py
# ============================================================================
"""
Tests for logging utilities
"""

import json
import logging

import pytest

from medication_scan.utils.logging import ContextFormatter, JsonFormatter, log_performance
from tests.fakes import ScriptedEngine


def test_json_formatter():
    record = logging.LogRecord(
        name="medication_scan.extractors.ocr_client",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg="OCR failed for %d of %d file(s)",
        args=(1, 3),
        exc_info=None,
    )

    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "WARNING"
    assert data["logger"] == "medication_scan.extractors.ocr_client"
    assert data["message"] == "OCR failed for 1 of 3 file(s)"
    assert data["line"] == 42
    assert "timestamp" in data


def test_log_performance_sync(caplog):
    logger = logging.getLogger("test.perf")

    @log_performance(logger, "Normalization")
    def work(x):
        return x * 2

    with caplog.at_level(logging.INFO, logger="test.perf"):
        assert work(21) == 42

    assert "Normalization completed in" in caplog.text


@pytest.mark.asyncio
async def test_log_performance_async_failure(caplog):
    logger = logging.getLogger("test.perf")

    @log_performance(logger, "Label analysis")
    async def work():
        raise ValueError("boom")

    with caplog.at_level(logging.INFO, logger="test.perf"):
        with pytest.raises(ValueError):
            await work()

    assert "Label analysis failed after" in caplog.text
    assert "boom" in caplog.text


def _ocr_record(**context):
    record = logging.LogRecord(
        name="medication_scan.extractors.ocr_client",
        level=logging.INFO,
        pathname=__file__,
        lineno=7,
        msg="OCR operation op-9 started for label.jpg",
        args=(),
        exc_info=None,
    )
    for key, value in context.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_ocr_context():
    data = json.loads(JsonFormatter().format(_ocr_record(operation_id="op-9", source_file="label.jpg")))

    assert data["operation_id"] == "op-9"
    assert data["source_file"] == "label.jpg"


def test_context_formatter():
    with_context = ContextFormatter().format(_ocr_record(operation_id="op-9", source_file=None))
    without_context = ContextFormatter().format(_ocr_record())

    assert with_context.endswith("OCR operation op-9 started for label.jpg [operation_id=op-9]")
    assert without_context.endswith("OCR operation op-9 started for label.jpg")


@pytest.mark.asyncio
async def test_ocr_client_logs_carry_operation_id(make_client, caplog, tylenol_label_pages):
    client = make_client(ScriptedEngine(pages_by_data={b"img": tylenol_label_pages}))

    with caplog.at_level(logging.INFO, logger="medication_scan.extractors.ocr_client"):
        await client.analyze(b"img", filename="tylenol.jpg")

    started = [r for r in caplog.records if "started" in r.getMessage()]
    assert started[0].operation_id == "op-1"
    assert started[0].source_file == "tylenol.jpg"
