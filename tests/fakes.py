# ============================================================================
# FILE: tests/fakes.py
# ============================================================================
"""
In-memory stand-ins for the OCR engine and the drug vocabulary.
"""

from typing import Dict, List, Optional

from medication_scan.core.models import (
    DrugRecord,
    OcrFileResult,
    ReadLine,
    ReadPage,
    ReadSucceeded,
)
from medication_scan.extractors.base import BaseOcrEngine
from medication_scan.utils.exceptions import VocabularyLookupError


QUAD = [10.0, 10.0, 200.0, 10.0, 200.0, 40.0, 10.0, 40.0]


def make_page(index: int, *texts: str) -> ReadPage:
    """Build an engine page with one line per text."""
    return ReadPage(index=index, lines=[ReadLine(text=t, bounding_box=list(QUAD), confidence=0.98) for t in texts])


def make_result(filename: Optional[str], *texts: str) -> OcrFileResult:
    """Build a single-page OCR result."""
    return OcrFileResult.from_pages([make_page(1, *texts)], filename=filename)


class FakeTimer:
    """Clock and sleep pair where sleeping advances the clock instantly."""

    def __init__(self):
        self.now = 0.0
        self.sleeps: List[float] = []

    def clock(self) -> float:
        return self.now

    async def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedEngine(BaseOcrEngine):
    """
    In-memory OCR engine.

    pages_by_data: file bytes -> pages returned on success
    submit_errors: file bytes -> exception raised on every submit, or a list
                   of exceptions raised one per submit before succeeding
    poll_script:   outcomes (or exceptions) returned by poll() before the
                   engine starts reporting success
    """

    def __init__(
        self,
        pages_by_data: Optional[Dict[bytes, List[ReadPage]]] = None,
        submit_errors: Optional[Dict[bytes, object]] = None,
        poll_script: Optional[list] = None
    ):
        super().__init__()
        self.pages_by_data = pages_by_data or {}
        self.submit_errors = submit_errors or {}
        self.poll_script = list(poll_script or [])
        self.submit_calls = 0
        self.configs: list = []
        self.poll_calls = 0
        self.closed = False
        self._handles: Dict[str, bytes] = {}

    async def submit(self, data: bytes, config=None) -> str:
        self.submit_calls += 1
        self.configs.append(config)
        errors = self.submit_errors.get(data)
        if isinstance(errors, list):
            if errors:
                raise errors.pop(0)
        elif errors is not None:
            raise errors

        handle = f"https://ocr.test/vision/v3.2/read/analyzeResults/op-{self.submit_calls}"
        self._handles[handle] = data
        return handle

    async def poll(self, handle: str, config=None):
        self.poll_calls += 1
        if self.poll_script:
            step = self.poll_script.pop(0)
            if isinstance(step, Exception):
                raise step
            return step
        return ReadSucceeded(pages=self.pages_by_data.get(self._handles[handle], []))

    def operation_id(self, handle: str) -> str:
        return handle.rsplit("/", 1)[-1]

    async def close(self):
        self.closed = True


class FakeVocabulary:
    """Vocabulary that knows a fixed set of names."""

    def __init__(self, known=(), failing=()):
        self.known = set(known)
        self.failing = set(failing)
        self.calls: List[str] = []
        self.closed = False

    async def search(self, name: str) -> List[DrugRecord]:
        self.calls.append(name)
        if name in self.failing:
            raise VocabularyLookupError(f"RxNav request for '{name}' failed", name=name)
        if name in self.known:
            return [DrugRecord(rxcui="12345", name=name, tty="SBD")]
        return []

    async def close(self):
        self.closed = True
