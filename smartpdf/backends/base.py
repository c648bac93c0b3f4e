"""Backend protocol for PDF operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Protocol, Sequence


@dataclass
class BackendDocument:
    """Represents a loaded PDF document with backend-specific helpers."""

    num_pages: int
    file_size: int

    @property
    def metadata(self) -> Any:
        return None

    @property
    def is_encrypted(self) -> bool:
        return False

    def iter_pages(self) -> Iterable[object]:
        raise NotImplementedError

    def get_page(self, index: int) -> object:
        raise NotImplementedError

    def copy_metadata(
        self,
        writer: object,
        *,
        title_suffix: str = "",
        pages_label: str | None = None,
    ) -> None:
        raise NotImplementedError


class PDFBackend(Protocol):
    """Protocol defining backend operations for PDF reading/writing."""

    def load(self, source: str | bytes, password: str | None = None) -> BackendDocument:
        """Load a PDF from a path or raw bytes and return a document wrapper."""

    def new_writer(self) -> object:
        """Return a backend writer instance."""

    def add_pages(self, writer: object, document: BackendDocument, indices: Sequence[int]) -> None:
        """Copy the pages at ``indices`` from ``document`` into ``writer`` in order."""

    def to_bytes(self, writer: object) -> bytes:
        """Serialise a writer into standalone PDF bytes."""
