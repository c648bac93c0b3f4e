"""Shared builders for the test-suite."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from pypdf import PdfReader, PdfWriter

# Each page gets a distinct width so copies can be traced back to their source index.
BASE_WIDTH = 100


def page_width(index: int) -> int:
    return BASE_WIDTH + index


def source_indices(payload: bytes) -> List[int]:
    """Return the source page indices contained in a chunk payload."""
    reader = PdfReader(io.BytesIO(payload))
    return [int(float(page.mediabox.width)) - BASE_WIDTH for page in reader.pages]


def write_pdf(path: Path, num_pages: int, metadata: Optional[Dict[str, str]] = None) -> Path:
    writer = PdfWriter()
    for index in range(num_pages):
        writer.add_blank_page(width=page_width(index), height=200)
    if metadata:
        writer.add_metadata(metadata)
    with path.open("wb") as stream:
        writer.write(stream)
    return path


def sections_response(*sections: dict) -> dict:
    return {"sections": list(sections)}


class FakeStructuringClient:
    """Returns canned responses in call order; exceptions in the list are raised."""

    def __init__(self, responses: Sequence[Union[str, dict, Exception, Callable[[bytes], str]]]) -> None:
        self.responses = list(responses)
        self.calls: List[bytes] = []
        self.instructions: List[str] = []

    def generate(self, payload: bytes, *, instruction: str, mime_type: str = "application/pdf") -> str:
        self.calls.append(payload)
        self.instructions.append(instruction)
        if not self.responses:
            raise AssertionError("Unexpected extra request")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(payload)
        if isinstance(response, dict):
            return json.dumps(response)
        return response
