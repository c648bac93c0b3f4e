"""
SmartPDF - Convert PDF pages into structured, editable Word documents.

The source PDF is split into small page chunks, each chunk is analysed by a
document-understanding model that returns headings, paragraphs and lists
with font hints, and the combined result is rendered as a DOCX package.

Quick Start:
    >>> from smartpdf import ConversionPipeline, Settings
    >>> pipeline = ConversionPipeline(settings=Settings.from_env())
    >>> result = pipeline.convert('report.pdf', '1-5, 10')
    >>> result.save('output/')

Main Classes:
    - ConversionPipeline: Runs a complete conversion job
    - ExtractionOrchestrator: Structures chunks through a StructuringClient
    - DocumentRenderer: Renders sections into DOCX bytes
    - BatchConverter: Converts several PDFs, isolating failures per file

Exceptions:
    - SmartPDFException: Base exception
    - SelectionEmptyError: Page specification selects nothing
    - SegmentationError: Source PDF unreadable
    - ExtractionChunkError: One chunk failed (recovered)
    - RenderSectionError: One section failed (recovered)
    - RenderPackageError: DOCX packaging failed

For CLI usage, use the 'smartpdf' command after installation.
"""

from smartpdf.assembler import FALLBACK_TEXT, assemble
from smartpdf.config import Settings
from smartpdf.document import SourceDocument
from smartpdf.exceptions import (
    ConfigurationError,
    EncryptedPDFError,
    ExtractionChunkError,
    RenderPackageError,
    RenderSectionError,
    ResponseFormatError,
    SegmentationError,
    SelectionEmptyError,
    SmartPDFException,
)
from smartpdf.extraction import (
    ExtractionOrchestrator,
    GeminiStructuringClient,
    StructuringClient,
    extract_sections,
)
from smartpdf.pipeline import (
    BatchConverter,
    ConversionPipeline,
    JobState,
    ProgressEvent,
    convert_pdf,
    find_pdf_files,
)
from smartpdf.renderer import CONTENT_TYPE, DocumentRenderer, render_document, resolve_style
from smartpdf.sections import BulletList, Heading, Paragraph, Section, parse_extraction_response
from smartpdf.segmenter import DocumentSegmenter, chunk_indices, segment_document
from smartpdf.selection import (
    build_output_filename,
    parse_page_selection,
    resolve_page_selection,
)
from smartpdf.types import (
    BatchResult,
    Chunk,
    ChunkOutcome,
    ConversionResult,
    DocumentMetadata,
    ExtractionReport,
    FileOutcome,
    PDFInfo,
    RenderReport,
    StructuredDocument,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Pipeline
    "ConversionPipeline",
    "JobState",
    "ProgressEvent",
    "convert_pdf",
    "BatchConverter",
    "find_pdf_files",
    "Settings",
    # Stages
    "parse_page_selection",
    "resolve_page_selection",
    "build_output_filename",
    "SourceDocument",
    "DocumentSegmenter",
    "chunk_indices",
    "segment_document",
    "StructuringClient",
    "GeminiStructuringClient",
    "ExtractionOrchestrator",
    "extract_sections",
    "parse_extraction_response",
    "assemble",
    "FALLBACK_TEXT",
    "DocumentRenderer",
    "render_document",
    "resolve_style",
    "CONTENT_TYPE",
    # Data types
    "Heading",
    "Paragraph",
    "BulletList",
    "Section",
    "Chunk",
    "ChunkOutcome",
    "ExtractionReport",
    "StructuredDocument",
    "RenderReport",
    "DocumentMetadata",
    "ConversionResult",
    "FileOutcome",
    "BatchResult",
    "PDFInfo",
    # Exceptions
    "SmartPDFException",
    "ConfigurationError",
    "SelectionEmptyError",
    "SegmentationError",
    "EncryptedPDFError",
    "ExtractionChunkError",
    "ResponseFormatError",
    "RenderSectionError",
    "RenderPackageError",
    # Version info
    "__version__",
]
