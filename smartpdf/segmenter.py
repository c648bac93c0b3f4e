"""Split a page selection into bounded standalone PDF chunks."""

from __future__ import annotations

import logging
import math
from typing import List, Sequence

from .document import SourceDocument
from .exceptions import ConfigurationError
from .selection import format_page_label
from .types import Chunk

LOGGER = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 5


def chunk_indices(selection: Sequence[int], chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[List[int]]:
    """Partition ``selection`` into consecutive groups of at most ``chunk_size``.

    >>> chunk_indices(list(range(12)), 5)
    [[0, 1, 2, 3, 4], [5, 6, 7, 8, 9], [10, 11]]
    """
    if chunk_size < 1:
        raise ConfigurationError(f"Chunk size must be >= 1, got {chunk_size}")

    num_chunks = math.ceil(len(selection) / chunk_size)
    return [
        list(selection[chunk_index * chunk_size:(chunk_index + 1) * chunk_size])
        for chunk_index in range(num_chunks)
    ]


class DocumentSegmenter:
    """Build standalone chunk payloads from a loaded :class:`SourceDocument`."""

    def __init__(self, document: SourceDocument, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ConfigurationError(f"Chunk size must be >= 1, got {chunk_size}")
        self.document = document
        self.chunk_size = chunk_size

    def segment(self, selection: Sequence[int]) -> List[Chunk]:
        groups = chunk_indices(selection, self.chunk_size)
        chunks: List[Chunk] = []
        for chunk_index, pages in enumerate(groups):
            label = format_page_label(pages)
            payload = self.document.extract_pages(pages, pages_label=label)
            LOGGER.debug(
                "Chunk %d/%d: pages %s (%d bytes)",
                chunk_index + 1,
                len(groups),
                label,
                len(payload),
            )
            chunks.append(Chunk(index=chunk_index, pages=tuple(pages), payload=payload))
        return chunks


def segment_document(
    document: SourceDocument,
    selection: Sequence[int],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[Chunk]:
    """Convenience wrapper around :meth:`DocumentSegmenter.segment`."""
    return DocumentSegmenter(document, chunk_size=chunk_size).segment(selection)


__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "chunk_indices",
    "DocumentSegmenter",
    "segment_document",
]
