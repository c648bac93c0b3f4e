"""End-to-end conversion of a PDF into a structured Word document.

A conversion moves through the states of :class:`JobState`::

    IDLE -> SEGMENTING -> EXTRACTING -> ASSEMBLING -> RENDERING -> DONE

A fatal error in any state moves the job to FAILED.

Every transition, and every chunk while extracting, is reported as a
:class:`ProgressEvent`. All state is local to one :meth:`ConversionPipeline.convert`
call, so a pipeline instance can serve independent jobs.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Mapping, Optional, Union

from .assembler import assemble
from .backends.base import PDFBackend
from .config import Settings
from .document import SourceDocument
from .exceptions import SegmentationError, SmartPDFException
from .extraction.client import GeminiStructuringClient, StructuringClient
from .extraction.orchestrator import ExtractionOrchestrator, ProgressCallback
from .renderer import CONTENT_TYPE, DocumentRenderer
from .segmenter import DocumentSegmenter
from .selection import build_output_filename, resolve_page_selection
from .types import BatchResult, ConversionResult, DocumentMetadata, FileOutcome
from .utils import time_block, to_path

LOGGER = logging.getLogger(__name__)


class JobState(str, Enum):
    IDLE = "idle"
    SEGMENTING = "segmenting"
    EXTRACTING = "extracting"
    ASSEMBLING = "assembling"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ProgressEvent:
    """A state transition or chunk boundary within one conversion."""

    state: JobState
    percent: int
    message: str
    chunk_index: Optional[int] = None


EventCallback = Callable[[ProgressEvent], None]


class _JobTracker:
    """Tracks the current state of one job and forwards events."""

    def __init__(self, on_event: Optional[EventCallback]) -> None:
        self.state = JobState.IDLE
        self.percent = 0
        self._on_event = on_event

    def transition(self, state: JobState, message: str, *, chunk_index: Optional[int] = None) -> None:
        self.state = state
        LOGGER.debug("Job state -> %s: %s", state.value, message)
        if self._on_event:
            self._on_event(ProgressEvent(state, self.percent, message, chunk_index))

    def progress(self, percent: int, message: str, chunk_index: Optional[int] = None) -> None:
        self.percent = max(self.percent, percent)
        if self._on_event:
            self._on_event(ProgressEvent(self.state, self.percent, message, chunk_index))


class ConversionPipeline:
    """Convert PDFs by segmenting, structuring remotely, assembling and rendering."""

    def __init__(
        self,
        client: Optional[StructuringClient] = None,
        *,
        settings: Optional[Settings] = None,
        backend: Optional[PDFBackend] = None,
        renderer: Optional[DocumentRenderer] = None,
    ) -> None:
        self.settings = (settings or Settings()).check()
        self.client = client or GeminiStructuringClient(
            self.settings.api_key,
            self.settings.model_name,
            request_timeout=self.settings.request_timeout,
        )
        self.backend = backend
        self.renderer = renderer or DocumentRenderer()

    def convert(
        self,
        source: Union[str, Path, bytes],
        page_spec: Optional[str] = "",
        *,
        password: Optional[str] = None,
        source_name: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_event: Optional[EventCallback] = None,
    ) -> ConversionResult:
        tracker = _JobTracker(on_event)
        try:
            return self._run(tracker, source, page_spec, password, source_name, on_progress)
        except SmartPDFException as exc:
            LOGGER.error("Conversion failed during %s: %s", tracker.state.value, exc)
            tracker.transition(JobState.FAILED, str(exc))
            raise
        except Exception as exc:
            LOGGER.exception("Unexpected error during %s", tracker.state.value)
            tracker.transition(JobState.FAILED, str(exc))
            raise

    def _run(
        self,
        tracker: _JobTracker,
        source: Union[str, Path, bytes],
        page_spec: Optional[str],
        password: Optional[str],
        source_name: Optional[str],
        on_progress: Optional[ProgressCallback],
    ) -> ConversionResult:
        tracker.transition(JobState.SEGMENTING, "Reading source document...")
        with time_block(LOGGER, "Segmentation"):
            document = SourceDocument(source, password=password, backend=self.backend, name=source_name)
            selection = resolve_page_selection(page_spec, document.num_pages)
            chunks = DocumentSegmenter(document, chunk_size=self.settings.chunk_size).segment(selection)
        LOGGER.info(
            "Selected %d of %d page(s) from %s in %d chunk(s)",
            len(selection),
            document.num_pages,
            document.name,
            len(chunks),
        )

        tracker.transition(JobState.EXTRACTING, f"Structuring {len(chunks)} chunk(s)...")
        orchestrator = ExtractionOrchestrator(
            self.client,
            max_retries=self.settings.max_retries,
            retry_backoff_seconds=self.settings.retry_backoff_seconds,
        )
        chunk_positions = iter(range(len(chunks)))

        def forward(percent: int, message: str) -> None:
            tracker.progress(percent, message, chunk_index=next(chunk_positions, None))
            if on_progress:
                on_progress(percent, message)

        extraction = orchestrator.extract(chunks, on_progress=forward)

        tracker.transition(JobState.ASSEMBLING, "Assembling document structure...")
        structured = assemble(extraction.sections)

        tracker.transition(JobState.RENDERING, "Rendering Word document...")
        content, rendering = self.renderer.render_with_report(structured, self._metadata_for(document))

        result = ConversionResult(
            content=content,
            filename=build_output_filename(document.name, page_spec),
            content_type=CONTENT_TYPE,
            document=structured,
            page_selection=selection,
            extraction=extraction,
            rendering=rendering,
        )
        tracker.transition(JobState.DONE, f"Converted {len(selection)} page(s) into {result.filename}")
        return result

    def _metadata_for(self, document: SourceDocument) -> DocumentMetadata:
        metadata = dataclasses.replace(self.renderer.metadata)
        source = document.metadata
        if source is not None:
            if getattr(source, "title", None):
                metadata.title = str(source.title)
            if getattr(source, "subject", None):
                metadata.subject = str(source.subject)
        return metadata


def find_pdf_files(inputs: Iterable[Union[str, Path]]) -> List[Path]:
    """Expand files and directories into an ordered, de-duplicated list of PDFs."""
    files: List[Path] = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            candidates = sorted(child for child in path.glob("*.pdf") if child.is_file())
        elif path.is_file():
            candidates = [path]
        else:
            raise SegmentationError(f"PDF file or directory not found: {item}")
        for candidate in candidates:
            if candidate not in files:
                files.append(candidate)
    return files


class BatchConverter:
    """Convert several PDFs in turn; a failing file does not stop the rest.

    ``page_specs`` and ``passwords`` are keyed by file name and override the
    shared page specification for that file.
    """

    def __init__(
        self,
        pipeline: ConversionPipeline,
        *,
        page_specs: Optional[Mapping[str, str]] = None,
        passwords: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.pipeline = pipeline
        self.page_specs = dict(page_specs or {})
        self.passwords = dict(passwords or {})

    def convert_all(
        self,
        inputs: Iterable[Union[str, Path]],
        page_spec: Optional[str] = "",
        output_dir: Optional[Union[str, Path]] = None,
        progress_callback: Optional[Callable[[str, int, int], None]] = None,
    ) -> BatchResult:
        pdf_files = find_pdf_files(inputs)
        destination = to_path(output_dir) if output_dir else None
        if destination is not None:
            destination.mkdir(parents=True, exist_ok=True)

        batch = BatchResult()
        for position, pdf_file in enumerate(pdf_files, start=1):
            if progress_callback:
                progress_callback(pdf_file.name, position, len(pdf_files))

            outcome = FileOutcome(source=pdf_file)
            try:
                outcome.result = self.pipeline.convert(
                    pdf_file,
                    self.page_specs.get(pdf_file.name, page_spec),
                    password=self.passwords.get(pdf_file.name),
                )
                outcome.output = outcome.result.save(destination or pdf_file.parent)
            except (SmartPDFException, OSError) as exc:
                outcome.error = str(exc) or exc.__class__.__name__
                LOGGER.error("Failed to convert %s: %s", pdf_file.name, outcome.error)
            batch.outcomes.append(outcome)

        LOGGER.info("Batch finished: %s", batch)
        return batch


def convert_pdf(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    page_spec: Optional[str] = "",
    *,
    settings: Optional[Settings] = None,
    client: Optional[StructuringClient] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> Path:
    """Convert ``input_path`` and write the DOCX next to it or to ``output_path``."""
    source = to_path(input_path)
    pipeline = ConversionPipeline(client, settings=settings or Settings.from_env())
    result = pipeline.convert(source, page_spec, on_progress=on_progress)
    destination = to_path(output_path) if output_path else source.parent
    return result.save(destination)


__all__ = [
    "JobState",
    "ProgressEvent",
    "ConversionPipeline",
    "BatchConverter",
    "find_pdf_files",
    "convert_pdf",
]
