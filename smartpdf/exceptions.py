"""
Custom exceptions for SmartPDF.

Fatal errors (selection, segmentation, packaging, configuration) propagate to
the caller. Chunk and section errors are recovered where they occur and kept
on the job's reports for diagnostics.
"""

from __future__ import annotations

from typing import Optional, Sequence


class SmartPDFException(Exception):
    """Base exception for all SmartPDF errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown SmartPDF error occurred."


class ConfigurationError(SmartPDFException):
    """Raised when settings are missing or invalid."""

    @property
    def default_message(self) -> str:
        return "Invalid SmartPDF configuration."


class SelectionEmptyError(SmartPDFException):
    """Raised when a page specification resolves to zero pages."""

    @property
    def default_message(self) -> str:
        return "No valid pages selected for conversion."


class SegmentationError(SmartPDFException):
    """Raised when the source PDF cannot be loaded or split."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(SegmentationError):
    """Raised when the PDF is encrypted and cannot be opened."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class ExtractionChunkError(SmartPDFException):
    """Raised when a single chunk cannot be structured by the remote service."""

    def __init__(
        self,
        message: str = "",
        *,
        chunk_index: Optional[int] = None,
        pages: Sequence[int] = (),
    ) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index
        self.pages = tuple(pages)

    @property
    def default_message(self) -> str:
        return "Structured extraction failed for a document chunk."


class ResponseFormatError(ExtractionChunkError):
    """Raised when a response is not JSON or does not match the section schema."""

    @property
    def default_message(self) -> str:
        return "Extraction response did not match the expected section schema."


class RenderSectionError(SmartPDFException):
    """Raised when a single section cannot be mapped to Word constructs."""

    def __init__(self, message: str = "", *, section_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.section_index = section_index

    @property
    def default_message(self) -> str:
        return "Failed to render a document section."


class RenderPackageError(SmartPDFException):
    """Raised when the Word document package cannot be serialised."""

    @property
    def default_message(self) -> str:
        return "Failed to package the Word document structure."


__all__ = [
    "SmartPDFException",
    "ConfigurationError",
    "SelectionEmptyError",
    "SegmentationError",
    "EncryptedPDFError",
    "ExtractionChunkError",
    "ResponseFormatError",
    "RenderSectionError",
    "RenderPackageError",
]
