"""Adapter utilities for interacting with source PDFs via pluggable backends."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from .backends import BackendDocument, PypdfBackend
from .backends.base import PDFBackend
from .exceptions import SegmentationError
from .types import PDFInfo


class SourceDocument:
    """High level helper around a backend-specific source PDF."""

    def __init__(
        self,
        source: Union[str, Path, bytes],
        password: Optional[str] = None,
        *,
        backend: Optional[PDFBackend] = None,
        name: Optional[str] = None,
    ) -> None:
        if isinstance(source, (bytes, bytearray)):
            self.path: Optional[Path] = None
            self.name = name or "document.pdf"
            loadable: Union[str, bytes] = bytes(source)
        else:
            self.path = Path(source)
            self.name = name or self.path.name
            loadable = str(source)
        self.backend: PDFBackend = backend or PypdfBackend()
        self._document: BackendDocument = self.backend.load(loadable, password=password)
        self._fonts_cache: Optional[List[str]] = None

    # ------------------------------------------------------------------
    # Basic document information helpers
    # ------------------------------------------------------------------
    @property
    def document(self) -> BackendDocument:
        return self._document

    @property
    def num_pages(self) -> int:
        return self._document.num_pages

    @property
    def file_size(self) -> int:
        return self._document.file_size

    @property
    def metadata(self) -> Any:
        return self._document.metadata

    @property
    def is_encrypted(self) -> bool:
        return self._document.is_encrypted

    @property
    def fonts(self) -> List[str]:
        if self._fonts_cache is None:
            fonts: set[str] = set()
            for page in self.iter_pages():
                resources = page.get("/Resources") if hasattr(page, "get") else None
                if resources is None:
                    continue
                font_dict = resources.get("/Font") if hasattr(resources, "get") else None
                if font_dict is None:
                    continue
                values = font_dict.values() if hasattr(font_dict, "values") else []
                for font in values:
                    try:
                        font_obj = font.get_object() if hasattr(font, "get_object") else font
                        base_font = font_obj.get("/BaseFont") if hasattr(font_obj, "get") else None
                        if base_font:
                            fonts.add(str(base_font).lstrip("/"))
                    except Exception:  # pragma: no cover - malformed font dictionaries
                        continue
            self._fonts_cache = sorted(fonts)
        return self._fonts_cache

    # ------------------------------------------------------------------
    # Interaction helpers
    # ------------------------------------------------------------------
    def iter_pages(self) -> Iterable[Any]:
        return self._document.iter_pages()

    def extract_pages(self, indices: Sequence[int], *, pages_label: Optional[str] = None) -> bytes:
        """Return a standalone PDF containing copies of ``indices`` in order."""
        for index in indices:
            if index < 0 or index >= self.num_pages:
                raise SegmentationError(
                    f"Page index {index} is out of bounds. PDF has {self.num_pages} pages."
                )

        try:
            writer = self.backend.new_writer()
            self.backend.add_pages(writer, self._document, indices)
            if pages_label:
                self._document.copy_metadata(
                    writer,
                    title_suffix=f" - Pages {pages_label}",
                    pages_label=f"Pages {pages_label}",
                )
            return self.backend.to_bytes(writer)
        except SegmentationError:
            raise
        except Exception as exc:
            raise SegmentationError(
                f"Unable to copy pages {list(indices)} from {self.name}. Error: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Reporting helpers
    # ------------------------------------------------------------------
    def to_pdf_info(self) -> PDFInfo:
        return PDFInfo(
            num_pages=self.num_pages,
            file_size=self.file_size,
            title=getattr(self.metadata, "title", None),
            author=getattr(self.metadata, "author", None),
            subject=getattr(self.metadata, "subject", None),
            is_encrypted=self.is_encrypted,
            fonts=self.fonts,
        )


__all__ = ["SourceDocument"]
