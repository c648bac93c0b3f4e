"""Render a :class:`StructuredDocument` into a DOCX package with python-docx."""

from __future__ import annotations

import io
import re
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, Twips

from .exceptions import RenderPackageError, RenderSectionError
from .sections import BulletList, Heading, Section
from .types import DocumentMetadata, RenderReport, SectionOutcome, StructuredDocument
from .utils import time_block

LOGGER = logging.getLogger(__name__)

CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

DEFAULT_FONT = "Calibri"
DEFAULT_FONT_SIZE = 12.0
PAGE_MARGIN = Inches(1)

HEADING_LEVELS = (1, 2, 3)
HEADING_SPACE_BEFORE = Twips(240)
HEADING_SPACE_AFTER = Twips(120)
LIST_STYLE = "List Bullet"
LIST_SPACE_AFTER = Twips(120)
PARAGRAPH_SPACE_AFTER = Twips(200)
PARAGRAPH_LINE_SPACING = 360 / 240

# Vertical tab and form feed become line breaks; other C0 controls are not valid XML.
_BREAK_CHARS = re.compile(r"[\x0b\x0c]")
_ILLEGAL_XML_CHARS = re.compile(r"[\x00-\x08\x0e-\x1f]")


@dataclass(frozen=True)
class TextStyle:
    """Resolved run styling for a section."""

    font: str
    size_pt: float

    @property
    def half_points(self) -> int:
        return int(round(self.size_pt * 2))


def resolve_style(section: Section) -> TextStyle:
    """Apply the default font and size to a section's optional styling hints."""
    font = getattr(section, "font_family", None) or DEFAULT_FONT
    size = getattr(section, "font_size", None) or DEFAULT_FONT_SIZE
    return TextStyle(font=font, size_pt=float(size))


def clean_text(text: Optional[str]) -> str:
    """Make extracted text safe for WordprocessingML runs."""
    if not text:
        return ""
    return _ILLEGAL_XML_CHARS.sub("", _BREAK_CHARS.sub("\n", text))


class DocumentRenderer:
    """Map sections onto headings, bulleted items and justified paragraphs."""

    def __init__(self, metadata: Optional[DocumentMetadata] = None) -> None:
        self.metadata = metadata or DocumentMetadata()

    def render(self, document: StructuredDocument, metadata: Optional[DocumentMetadata] = None) -> bytes:
        content, _ = self.render_with_report(document, metadata)
        return content

    def render_with_report(
        self,
        document: StructuredDocument,
        metadata: Optional[DocumentMetadata] = None,
    ) -> Tuple[bytes, RenderReport]:
        report = RenderReport()
        with time_block(LOGGER, "DOCX rendering"):
            docx = Document()
            self._apply_page_geometry(docx)
            self._apply_core_properties(docx, metadata or self.metadata)

            for index, section in enumerate(document):
                report.outcomes.append(self._render_isolated(docx, index, section, report))

            content = self._package(docx)

        if report.skipped_sections:
            LOGGER.warning(
                "Skipped %d of %d section(s) during rendering",
                len(report.skipped_sections),
                len(report.outcomes),
            )
        return content, report

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------
    @staticmethod
    def _apply_page_geometry(docx: DocxDocument) -> None:
        for section in docx.sections:
            section.top_margin = PAGE_MARGIN
            section.right_margin = PAGE_MARGIN
            section.bottom_margin = PAGE_MARGIN
            section.left_margin = PAGE_MARGIN

    @staticmethod
    def _apply_core_properties(docx: DocxDocument, metadata: DocumentMetadata) -> None:
        core = docx.core_properties
        core.author = metadata.author
        core.title = metadata.title
        core.comments = metadata.description
        if metadata.subject:
            core.subject = metadata.subject

    @staticmethod
    def _package(docx: DocxDocument) -> bytes:
        buffer = io.BytesIO()
        try:
            docx.save(buffer)
        except Exception as exc:
            LOGGER.error("Docx packaging error: %s", exc)
            raise RenderPackageError(f"Failed to package the Word document structure: {exc}") from exc
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Section level
    # ------------------------------------------------------------------
    def _render_isolated(
        self,
        docx: DocxDocument,
        index: int,
        section: Section,
        report: RenderReport,
    ) -> SectionOutcome:
        kind = getattr(section, "kind", type(section).__name__)
        body = docx.element.body
        existing = set(body)
        try:
            blocks = self._render_section(docx, index, section, report)
        except Exception as exc:
            for child in list(body):
                if child not in existing:
                    body.remove(child)
            error = RenderSectionError(
                f"Section {index} ({kind}) could not be rendered: {exc}", section_index=index
            )
            LOGGER.warning("Skipping invalid section during docx generation: %s", error)
            return SectionOutcome(index=index, kind=kind, error=str(error))
        return SectionOutcome(index=index, kind=kind, blocks=blocks)

    def _render_section(
        self,
        docx: DocxDocument,
        index: int,
        section: Section,
        report: RenderReport,
    ) -> int:
        style = resolve_style(section)

        if isinstance(section, Heading):
            level = section.level
            if level not in HEADING_LEVELS:
                LOGGER.warning("Heading level %s in section %d is unsupported; using level 1", level, index)
                report.normalized_headings.append((index, level))
                level = 1
            paragraph = docx.add_paragraph(style=f"Heading {level}")
            paragraph.paragraph_format.space_before = HEADING_SPACE_BEFORE
            paragraph.paragraph_format.space_after = HEADING_SPACE_AFTER
            self._add_run(paragraph, section.text, style, bold=True)
            return 1

        if isinstance(section, BulletList):
            items = section.items if isinstance(section.items, (list, tuple)) else ()
            for item in items:
                paragraph = docx.add_paragraph(style=LIST_STYLE)
                paragraph.paragraph_format.space_after = LIST_SPACE_AFTER
                self._add_run(paragraph, item, style)
            return len(items)

        paragraph = docx.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.JUSTIFY
        paragraph.paragraph_format.space_after = PARAGRAPH_SPACE_AFTER
        paragraph.paragraph_format.line_spacing = PARAGRAPH_LINE_SPACING
        self._add_run(paragraph, getattr(section, "text", ""), style)
        return 1

    @staticmethod
    def _add_run(paragraph, text: Optional[str], style: TextStyle, *, bold: bool = False) -> None:
        run = paragraph.add_run(clean_text(text))
        run.bold = bold or None
        run.font.name = style.font
        run.font.size = Pt(style.half_points / 2)


def render_document(
    document: StructuredDocument,
    metadata: Optional[DocumentMetadata] = None,
) -> bytes:
    """Convenience helper returning DOCX bytes for ``document``."""
    return DocumentRenderer(metadata).render(document)


__all__ = [
    "CONTENT_TYPE",
    "TextStyle",
    "resolve_style",
    "clean_text",
    "DocumentRenderer",
    "render_document",
]
