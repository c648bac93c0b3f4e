from __future__ import annotations

import io
from pathlib import Path

import pytest
from pypdf import PdfReader, PdfWriter

from helpers import source_indices
from smartpdf.document import SourceDocument
from smartpdf.exceptions import ConfigurationError, EncryptedPDFError, SegmentationError
from smartpdf.segmenter import DocumentSegmenter, chunk_indices, segment_document


@pytest.mark.parametrize(
    ("count", "size", "expected_sizes"),
    [
        (12, 5, [5, 5, 2]),
        (10, 5, [5, 5]),
        (1, 5, [1]),
        (0, 5, []),
        (7, 1, [1] * 7),
        (3, 10, [3]),
    ],
)
def test_chunk_indices_partitions_selection(count, size, expected_sizes) -> None:
    selection = list(range(0, count * 2, 2))

    groups = chunk_indices(selection, size)

    assert [len(group) for group in groups] == expected_sizes
    assert [index for group in groups for index in group] == selection


def test_chunk_indices_rejects_non_positive_size() -> None:
    with pytest.raises(ConfigurationError):
        chunk_indices([0, 1], 0)


def test_segment_preserves_pages_and_order(sample_pdf: Path) -> None:
    document = SourceDocument(sample_pdf)
    selection = [0, 2, 3, 4, 9, 11]

    chunks = segment_document(document, selection, chunk_size=5)

    assert [chunk.index for chunk in chunks] == [0, 1]
    assert [chunk.pages for chunk in chunks] == [(0, 2, 3, 4, 9), (11,)]
    assert [source_indices(chunk.payload) for chunk in chunks] == [[0, 2, 3, 4, 9], [11]]
    assert [chunk.label for chunk in chunks] == ["1-10", "12"]


def test_segment_payload_is_standalone_pdf(sample_pdf: Path) -> None:
    document = SourceDocument(sample_pdf)

    chunk = DocumentSegmenter(document, chunk_size=3).segment([4, 5, 6])[0]

    reader = PdfReader(io.BytesIO(chunk.payload))
    assert len(reader.pages) == 3
    assert reader.metadata.title == "Quarterly Report - Pages 5-7"


def test_segmenter_rejects_invalid_chunk_size(sample_pdf: Path) -> None:
    with pytest.raises(ConfigurationError):
        DocumentSegmenter(SourceDocument(sample_pdf), chunk_size=0)


def test_extract_pages_out_of_bounds(sample_pdf: Path) -> None:
    document = SourceDocument(sample_pdf)

    with pytest.raises(SegmentationError):
        document.extract_pages([12])


def test_source_document_from_bytes(sample_pdf: Path) -> None:
    document = SourceDocument(sample_pdf.read_bytes(), name="upload.pdf")

    assert document.num_pages == 12
    assert document.path is None
    assert document.name == "upload.pdf"


def test_corrupt_pdf_raises_segmentation_error(corrupt_pdf: Path) -> None:
    with pytest.raises(SegmentationError):
        SourceDocument(corrupt_pdf)


def test_missing_pdf_raises_segmentation_error(tmp_path: Path) -> None:
    with pytest.raises(SegmentationError):
        SourceDocument(tmp_path / "missing.pdf")


def test_empty_pdf_raises_segmentation_error(make_pdf) -> None:
    with pytest.raises(SegmentationError):
        SourceDocument(make_pdf(0, name="empty.pdf"))


def test_encrypted_pdf_requires_password(tmp_path: Path) -> None:
    path = tmp_path / "locked.pdf"
    writer = PdfWriter()
    writer.add_blank_page(width=200, height=200)
    writer.encrypt("secret")
    with path.open("wb") as handle:
        writer.write(handle)

    with pytest.raises(EncryptedPDFError):
        SourceDocument(path)
    with pytest.raises(EncryptedPDFError):
        SourceDocument(path, password="wrong")
    assert SourceDocument(path, password="secret").num_pages == 1


def test_pdf_info(sample_pdf: Path) -> None:
    info = SourceDocument(sample_pdf).to_pdf_info()

    assert info.num_pages == 12
    assert info.file_size == sample_pdf.stat().st_size
    assert info.title == "Quarterly Report"
    assert info.is_encrypted is False
    assert info.fonts == []
