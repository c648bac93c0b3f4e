"""Chunk-by-chunk structured extraction."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from ..exceptions import ExtractionChunkError
from ..sections import Section, parse_extraction_response
from ..types import Chunk, ChunkOutcome, ExtractionReport
from ..utils import time_block
from .client import StructuringClient
from .prompts import EXTRACTION_INSTRUCTION, PDF_MIME_TYPE

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, str], None]

FINALIZING_MESSAGE = "Finalizing document structure..."


class ExtractionOrchestrator:
    """Send chunks to a :class:`StructuringClient` one at a time, in order.

    A failing chunk contributes no sections and does not stop the remaining
    chunks. Each chunk gets ``max_retries`` extra attempts, spaced by
    ``retry_backoff_seconds``.
    """

    def __init__(
        self,
        client: StructuringClient,
        *,
        instruction: str = EXTRACTION_INSTRUCTION,
        max_retries: int = 0,
        retry_backoff_seconds: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.client = client
        self.instruction = instruction
        self.max_retries = max(0, max_retries)
        self.retry_backoff_seconds = max(0.0, retry_backoff_seconds)
        self._sleep = sleep

    def extract(
        self,
        chunks: Sequence[Chunk],
        on_progress: Optional[ProgressCallback] = None,
    ) -> ExtractionReport:
        report = ExtractionReport()
        total = len(chunks)

        for position, chunk in enumerate(chunks):
            if on_progress:
                on_progress(
                    int(100 * position / total + 0.5),
                    f"Processing pages {chunk.label} (Batch {position + 1}/{total})...",
                )

            outcome = self._extract_chunk(chunk)
            report.outcomes.append(outcome)
            report.sections.extend(outcome.sections)

        if on_progress:
            on_progress(100, FINALIZING_MESSAGE)

        if report.failed_chunks:
            LOGGER.warning(
                "%d of %d chunk(s) failed: %s",
                len(report.failed_chunks),
                total,
                ", ".join(str(outcome.index) for outcome in report.failed_chunks),
            )
        return report

    def _extract_chunk(self, chunk: Chunk) -> ChunkOutcome:
        outcome = ChunkOutcome(index=chunk.index, pages=chunk.pages)
        allowed_attempts = self.max_retries + 1

        while True:
            outcome.attempts += 1
            try:
                outcome.sections = self._request(chunk)
                outcome.error = None
                LOGGER.info(
                    "Chunk %d (pages %s) produced %d section(s)",
                    chunk.index,
                    chunk.label,
                    len(outcome.sections),
                )
                return outcome
            except Exception as exc:
                outcome.error = str(exc) or exc.__class__.__name__
                LOGGER.error(
                    "Error processing chunk %d (pages %s), attempt %d/%d: %s",
                    chunk.index,
                    chunk.label,
                    outcome.attempts,
                    allowed_attempts,
                    outcome.error,
                )

            if outcome.attempts >= allowed_attempts:
                return outcome

            if self.retry_backoff_seconds:
                self._sleep(self.retry_backoff_seconds)

    def _request(self, chunk: Chunk) -> List[Section]:
        try:
            with time_block(LOGGER, f"Chunk {chunk.index} extraction"):
                text = self.client.generate(
                    chunk.payload,
                    instruction=self.instruction,
                    mime_type=PDF_MIME_TYPE,
                )
            return parse_extraction_response(text)
        except ExtractionChunkError as exc:
            exc.chunk_index = chunk.index
            exc.pages = chunk.pages
            raise
        except Exception as exc:
            raise ExtractionChunkError(
                f"Request failed: {exc}", chunk_index=chunk.index, pages=chunk.pages
            ) from exc


def extract_sections(
    chunks: Sequence[Chunk],
    client: StructuringClient,
    on_progress: Optional[ProgressCallback] = None,
) -> List[Section]:
    """Return the ordered sections of every chunk that was structured successfully."""
    return ExtractionOrchestrator(client).extract(chunks, on_progress=on_progress).sections


__all__ = [
    "ExtractionOrchestrator",
    "ProgressCallback",
    "FINALIZING_MESSAGE",
    "extract_sections",
]
