"""Page selection parsing and output naming."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

from .exceptions import SelectionEmptyError

PageList = List[int]

_SINGLE_RE = re.compile(r"^(\d+)$")
_RANGE_RE = re.compile(r"^(\d+)\s*-\s*(\d+)$")


def parse_page_selection(page_spec: Optional[str], total_pages: int) -> PageList:
    """Parse a page specification such as ``"1, 3-5, 10"`` into zero-based indices.

    An empty specification selects every page. Tokens are 1-based page numbers
    or inclusive ``start-end`` ranges. Invalid, out-of-bounds and reversed
    tokens are dropped; ranges running past the last page are clamped. The
    result is deduplicated and sorted and may be empty.
    """
    if not page_spec or not page_spec.strip():
        return list(range(total_pages))

    pages: set[int] = set()
    for token in page_spec.split(","):
        token = token.strip()
        if not token:
            continue

        single = _SINGLE_RE.match(token)
        if single:
            page_num = int(single.group(1))
            if 1 <= page_num <= total_pages:
                pages.add(page_num - 1)
            continue

        match = _RANGE_RE.match(token)
        if not match:
            continue

        start = int(match.group(1))
        end = int(match.group(2))
        if start < 1 or start > end:
            continue

        pages.update(page_num - 1 for page_num in range(start, min(end, total_pages) + 1))

    return sorted(pages)


def resolve_page_selection(page_spec: Optional[str], total_pages: int) -> PageList:
    """Like :func:`parse_page_selection` but raise when nothing is selected."""
    pages = parse_page_selection(page_spec, total_pages)
    if not pages:
        raise SelectionEmptyError(
            f"No valid pages selected for conversion: '{page_spec}' "
            f"(document has {total_pages} pages)."
        )
    return pages


def format_page_label(pages: Sequence[int]) -> str:
    """Describe zero-based ``pages`` as a 1-based label (``"4"`` or ``"1-5"``)."""
    if not pages:
        return ""
    if len(pages) == 1:
        return f"{pages[0] + 1}"
    return f"{pages[0] + 1}-{pages[-1] + 1}"


def build_output_filename(source_name: str, page_spec: Optional[str] = None) -> str:
    """Return the DOCX filename for ``source_name`` and an optional page spec.

    ``report.pdf`` with ``"1-3, 7"`` becomes ``report_p1-3_7.docx``.
    """
    base_name = Path(source_name).name
    if base_name.lower().endswith(".pdf"):
        base_name = base_name[:-4]
    base_name = base_name or "document"
    suffix = ""
    if page_spec and page_spec.strip():
        sanitized = re.sub(r"\s+", "", page_spec).replace(",", "_")
        suffix = f"_p{sanitized}"
    return f"{base_name}{suffix}.docx"


__all__ = [
    "parse_page_selection",
    "resolve_page_selection",
    "format_page_label",
    "build_output_filename",
]
