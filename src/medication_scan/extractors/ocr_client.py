# ============================================================================
# src/medication_scan/extractors/ocr_client.py
# ============================================================================
"""
OCR Job Client

Turns image/PDF bytes into OcrFileResult while hiding the engine's
submit-then-poll protocol.

Failure handling:
- Engine says "failed"           -> OcrFailedError, no retry
- Polling budget used up         -> OcrTimeoutError, no retry
- Anything else (rejected submit,
  HTTP/network errors)           -> whole submit+poll sequence retried with
                                    backoff, then OcrFailedError

OCR_MAX_POLLING_SECONDS is one wall-clock budget per file, started at the
first submission and shared by every retry. Sleeps never run past it.

Batches run every file concurrently and return whatever succeeded; only a
batch in which every file failed raises.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence

from .base import BaseOcrEngine
from ..config.ocr_config import OcrSettings, ocr_settings
from ..core.backoff import calculate_backoff
from ..core.models import OcrFileResult, ReadFailed, ReadSucceeded, SourceFile
from ..utils.exceptions import ConfigurationError, OcrFailedError, OcrTimeoutError


Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]


@dataclass
class PollingBudget:
    """Wall-clock budget of one analyze() call."""
    started: float
    seconds: float
    operation_id: Optional[str] = None  # latest submitted operation

    def remaining(self, now: float) -> float:
        return self.seconds - (now - self.started)

    def exceeded(self) -> OcrTimeoutError:
        operation = f"OCR operation {self.operation_id}" if self.operation_id else "OCR"
        return OcrTimeoutError(
            f"{operation} did not finish within {self.seconds}s",
            operation_id=self.operation_id
        )


class OcrJobClient:
    """
    Runs OCR jobs against an asynchronous engine.

    Holds no per-call state, so one instance can serve any number of
    concurrent analyze() calls.

    Args:
        engine: OCR engine adapter
        settings: Default engine, polling and retry configuration
        sleep: Coroutine used to wait between polls and retries
        clock: Monotonic clock (seconds) for the polling budget
    """

    def __init__(
        self,
        engine: BaseOcrEngine,
        settings: Optional[OcrSettings] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.monotonic
    ):
        self.engine = engine
        self.settings = settings or ocr_settings
        self._sleep = sleep
        self._clock = clock
        self.logger = logging.getLogger(__name__)

    async def analyze(
        self,
        data: bytes,
        config: Optional[OcrSettings] = None,
        filename: Optional[str] = None
    ) -> OcrFileResult:
        """
        OCR one file, retrying transient failures.

        Args:
            data: Image or PDF bytes
            config: Per-call override of the client settings, including the
                engine credentials, endpoint and language
            filename: Carried through to the result for correlation

        Returns:
            OcrFileResult with lines from every page

        Raises:
            OcrTimeoutError: Polling budget exceeded, possibly across retries
            OcrFailedError: Engine failure, or all retries exhausted
        """
        config = config or self.settings
        label = filename or "<unnamed>"
        budget = PollingBudget(started=self._clock(), seconds=config.OCR_MAX_POLLING_SECONDS)
        last_error: Optional[Exception] = None

        for attempt in range(config.OCR_MAX_RETRIES + 1):
            if attempt > 0:
                delay = calculate_backoff(attempt - 1) / 1000
                if budget.remaining(self._clock()) <= delay:
                    self.logger.error(
                        f"OCR for {label} has no polling budget left for retry {attempt}: {last_error}",
                        extra={"operation_id": budget.operation_id, "source_file": filename}
                    )
                    raise budget.exceeded() from last_error

                self.logger.warning(
                    f"Retrying OCR for {label} in {delay:.1f}s "
                    f"(retry {attempt}/{config.OCR_MAX_RETRIES}): {last_error}",
                    extra={"operation_id": budget.operation_id, "source_file": filename}
                )
                await self._sleep(delay)

            try:
                return await self._submit_and_poll(data, config, filename, budget)
            except (OcrTimeoutError, OcrFailedError, ConfigurationError):
                raise
            except Exception as e:
                last_error = e

        self.logger.error(
            f"OCR for {label} failed after {config.OCR_MAX_RETRIES + 1} attempts: {last_error}",
            extra={"operation_id": budget.operation_id, "source_file": filename}
        )
        raise OcrFailedError(
            f"OCR failed after {config.OCR_MAX_RETRIES + 1} attempts: {last_error}",
            details=last_error
        ) from last_error

    async def _submit_and_poll(
        self,
        data: bytes,
        config: OcrSettings,
        filename: Optional[str],
        budget: PollingBudget
    ) -> OcrFileResult:
        handle = await self.engine.submit(data, config)
        operation_id = self.engine.operation_id(handle)
        budget.operation_id = operation_id
        context = {"operation_id": operation_id, "source_file": filename}
        self.logger.info(f"OCR operation {operation_id} started for {filename or '<unnamed>'}", extra=context)

        poll_attempt = 0
        while True:
            outcome = await self.engine.poll(handle, config)

            if isinstance(outcome, ReadSucceeded):
                result = OcrFileResult.from_pages(outcome.pages, filename=filename)
                self.logger.info(
                    f"OCR operation {operation_id} succeeded: "
                    f"{result.total_lines} lines on {result.pages} page(s)",
                    extra=context
                )
                return result

            if isinstance(outcome, ReadFailed):
                self.logger.error(f"OCR operation {operation_id} failed: {outcome.cause}", extra=context)
                raise OcrFailedError(f"OCR operation {operation_id} failed", details=outcome.cause)

            remaining = budget.remaining(self._clock())
            if remaining <= 0:
                self.logger.error(
                    f"OCR operation {operation_id} still {outcome.status} after {budget.seconds}s",
                    extra=context
                )
                raise budget.exceeded()

            # Last poll lands exactly on the deadline
            delay = min(calculate_backoff(poll_attempt) / 1000, remaining)
            self.logger.debug(
                f"OCR operation {operation_id} is {outcome.status}, polling again in {delay:.2f}s",
                extra=context
            )
            await self._sleep(delay)
            poll_attempt += 1

    async def analyze_batch(
        self,
        files: Sequence[SourceFile],
        config: Optional[OcrSettings] = None
    ) -> List[OcrFileResult]:
        """
        OCR many files concurrently, tolerating partial failure.

        Args:
            files: Source files
            config: Per-call override of the client settings

        Returns:
            Results for every file that succeeded, in input order

        Raises:
            The first file's error (input order) when no file succeeded
        """
        outcomes = await asyncio.gather(
            *(self.analyze(f.data, config, f.filename) for f in files),
            return_exceptions=True
        )

        results: List[OcrFileResult] = []
        failures: List[tuple] = []
        for source, outcome in zip(files, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                failures.append((source, outcome))
            else:
                results.append(outcome)

        if failures and not results:
            self.logger.error(f"OCR failed for all {len(failures)} file(s)")
            raise failures[0][1]

        if failures:
            failed_names = [source.filename or "<unnamed>" for source, _ in failures]
            self.logger.warning(
                f"OCR failed for {len(failures)} of {len(files)} file(s), "
                f"continuing with the rest: {failed_names}"
            )

        return results
