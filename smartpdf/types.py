"""
Type definitions and dataclasses for SmartPDF.

This module defines the data structures passed between the conversion
stages and the per-item reports collected along the way.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from .sections import Section
from .selection import format_page_label


@dataclass
class PDFInfo:
    """
    Source PDF information shown before a conversion.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: File size in bytes
        title: PDF title metadata
        author: PDF author metadata
        subject: PDF subject metadata
        is_encrypted: Whether the PDF is encrypted
        fonts: Font names referenced by the pages
    """
    num_pages: int
    file_size: int
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
    is_encrypted: bool = False
    fonts: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Chunk:
    """
    A bounded group of selected pages serialised as a standalone PDF.

    Attributes:
        index: Zero-based position of the chunk within the job
        pages: Zero-based page indices, in selection order
        payload: Standalone PDF bytes containing exactly ``pages``
    """
    index: int
    pages: Tuple[int, ...]
    payload: bytes = b""

    @property
    def label(self) -> str:
        """1-based page label, ``"3"`` or ``"3-7"``."""
        return format_page_label(self.pages)

    def __len__(self) -> int:
        return len(self.pages)


@dataclass
class ChunkOutcome:
    """Result of structuring one chunk."""
    index: int
    pages: Tuple[int, ...]
    sections: List[Section] = field(default_factory=list)
    error: Optional[str] = None
    attempts: int = 0

    @property
    def success(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        if self.success:
            return f"ChunkOutcome(index={self.index}, sections={len(self.sections)})"
        return f"ChunkOutcome(index={self.index}, error='{self.error}')"


@dataclass
class ExtractionReport:
    """Ordered sections from every chunk plus one outcome per chunk."""
    sections: List[Section] = field(default_factory=list)
    outcomes: List[ChunkOutcome] = field(default_factory=list)

    @property
    def failed_chunks(self) -> List[ChunkOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)


@dataclass(frozen=True)
class StructuredDocument:
    """Ordered sections of a converted document, ready to render."""
    sections: Tuple[Section, ...]

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def __getitem__(self, index: int) -> Section:
        return self.sections[index]


@dataclass
class SectionOutcome:
    """Result of rendering one section."""
    index: int
    kind: str
    blocks: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class RenderReport:
    """Per-section rendering outcomes."""
    outcomes: List[SectionOutcome] = field(default_factory=list)
    normalized_headings: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def skipped_sections(self) -> List[SectionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    @property
    def blocks(self) -> int:
        return sum(outcome.blocks for outcome in self.outcomes)


@dataclass
class DocumentMetadata:
    """Core properties written into the generated Word document."""
    title: str = "Converted Document"
    author: str = "SmartPDF AI"
    subject: Optional[str] = None
    description: str = "PDF to Word conversion via Gemini AI"


@dataclass
class ConversionResult:
    """
    Result of a complete PDF to Word conversion.

    Attributes:
        content: DOCX package bytes
        filename: Suggested output filename
        content_type: MIME type of ``content``
        document: Structured document that was rendered
        page_selection: Zero-based pages that were converted
        extraction: Per-chunk extraction report
        rendering: Per-section rendering report
    """
    content: bytes
    filename: str
    content_type: str
    document: StructuredDocument
    page_selection: List[int]
    extraction: ExtractionReport
    rendering: RenderReport

    @property
    def partial(self) -> bool:
        """Whether any chunk or section was skipped."""
        return bool(self.extraction.failed_chunks or self.rendering.skipped_sections)

    def save(self, destination: Union[str, Path]) -> Path:
        """Write ``content`` to ``destination`` (a directory or a file path)."""
        path = Path(destination)
        if path.is_dir():
            path = path / self.filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.content)
        return path

    def __str__(self) -> str:
        return (
            "ConversionResult(filename='{filename}', sections={sections}, "
            "failed_chunks={failed}, skipped_sections={skipped})"
        ).format(
            filename=self.filename,
            sections=len(self.document),
            failed=len(self.extraction.failed_chunks),
            skipped=len(self.rendering.skipped_sections),
        )


@dataclass
class FileOutcome:
    """What happened to one file of a batch conversion."""
    source: Path
    output: Optional[Path] = None
    result: Optional[ConversionResult] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """
    Result of converting several PDFs one after another.

    Attributes:
        outcomes: One entry per input file, in processing order
    """
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def success(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.success)

    @property
    def failure(self) -> int:
        return self.total - self.success

    @property
    def partial(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.result is not None and outcome.result.partial)

    def __str__(self) -> str:
        return "BatchResult(total={total}, success={success}, failure={failure}, partial={partial})".format(
            total=self.total,
            success=self.success,
            failure=self.failure,
            partial=self.partial,
        )
