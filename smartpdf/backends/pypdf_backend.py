"""pypdf backend implementation for SmartPDF."""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import EncryptedPDFError, SegmentationError
from .base import BackendDocument, PDFBackend


@dataclass
class PypdfDocument(BackendDocument):
    reader: PdfReader

    @property
    def metadata(self) -> Any:
        return self.reader.metadata

    @property
    def is_encrypted(self) -> bool:
        return bool(self.reader.is_encrypted)

    def iter_pages(self) -> Iterable[object]:
        return iter(self.reader.pages)

    def get_page(self, index: int) -> object:
        return self.reader.pages[index]

    def copy_metadata(self, writer: PdfWriter, *, title_suffix: str = "", pages_label: str | None = None) -> None:
        metadata_dict = {}
        metadata = self.reader.metadata

        if metadata and metadata.title:
            title = metadata.title
            if title_suffix:
                title = f"{title}{title_suffix}"
            metadata_dict['/Title'] = title
        if metadata and metadata.author:
            metadata_dict['/Author'] = metadata.author

        if pages_label:
            metadata_dict['/Keywords'] = pages_label

        metadata_dict.setdefault('/Producer', 'SmartPDF')
        writer.add_metadata(metadata_dict)


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, source: str | bytes, password: str | None = None) -> PypdfDocument:
        if isinstance(source, (bytes, bytearray)):
            raw_bytes = bytes(source)
            label = "<memory>"
        else:
            path = Path(source)
            label = str(source)
            if not path.exists() or not path.is_file():
                raise SegmentationError(f"PDF file not found: {source}")
            try:
                raw_bytes = path.read_bytes()
            except OSError as exc:
                raise SegmentationError(f"Unable to read PDF file: {source}. Error: {exc}") from exc

        try:
            reader = PdfReader(io.BytesIO(raw_bytes))
        except PdfReadError as exc:
            raise SegmentationError(f"Corrupted or invalid PDF file: {label}. Error: {exc}") from exc
        except Exception as exc:
            raise SegmentationError(f"Unexpected error reading PDF: {label}. Error: {exc}") from exc

        if reader.is_encrypted:
            if password:
                if reader.decrypt(password) == 0:
                    raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")
            else:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        try:
            num_pages = len(reader.pages)
        except Exception as exc:
            raise SegmentationError(f"Unable to read page tree: {label}. Error: {exc}") from exc
        if num_pages == 0:
            raise SegmentationError(f"PDF has no pages: {label}")

        return PypdfDocument(num_pages=num_pages, file_size=len(raw_bytes), reader=reader)

    def new_writer(self) -> PdfWriter:
        return PdfWriter()

    def add_pages(self, writer: PdfWriter, document: BackendDocument, indices: Sequence[int]) -> None:
        for index in indices:
            writer.add_page(document.get_page(index))

    def to_bytes(self, writer: PdfWriter) -> bytes:
        buffer = io.BytesIO()
        writer.write(buffer)
        return buffer.getvalue()
