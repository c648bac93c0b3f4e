"""Normalise extracted sections into a renderable document."""

from __future__ import annotations

import logging
from typing import Iterable

from .sections import Paragraph, Section
from .types import StructuredDocument

LOGGER = logging.getLogger(__name__)

FALLBACK_TEXT = "No content extracted."


def assemble(sections: Iterable[Section]) -> StructuredDocument:
    """Freeze ``sections`` in order, substituting a placeholder paragraph when empty."""
    ordered = tuple(sections)
    if not ordered:
        LOGGER.warning("No sections were extracted; using placeholder content")
        ordered = (Paragraph(text=FALLBACK_TEXT),)
    return StructuredDocument(sections=ordered)


__all__ = ["FALLBACK_TEXT", "assemble"]
