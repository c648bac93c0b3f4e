from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from helpers import write_pdf  # noqa: E402


@pytest.fixture()
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    def _create(num_pages: int = 12, name: str = "sample.pdf", metadata: Optional[Dict[str, str]] = None) -> Path:
        return write_pdf(tmp_path / name, num_pages, metadata)

    return _create


@pytest.fixture()
def sample_pdf(make_pdf: Callable[..., Path]) -> Path:
    return make_pdf(12, metadata={"/Title": "Quarterly Report", "/Producer": "smartpdf-tests"})


@pytest.fixture()
def corrupt_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "corrupt.pdf"
    path.write_bytes(b"this is not a pdf document")
    return path
