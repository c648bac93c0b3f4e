from __future__ import annotations

import io
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner
from docx import Document

from helpers import FakeStructuringClient, sections_response
from smartpdf.cli import cli
from smartpdf.pipeline import ConversionPipeline


def _pipeline_factory(client: FakeStructuringClient):
    def factory(settings):
        return ConversionPipeline(client, settings=settings)

    return factory


def test_info_command(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["info", str(sample_pdf)])

    assert result.exit_code == 0
    assert "Number of Pages" in result.output
    assert "12" in result.output
    assert "Quarterly Report" in result.output


def test_info_command_corrupt_pdf(corrupt_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["info", str(corrupt_pdf)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_plan_command_lists_batches(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["plan", str(sample_pdf), "--pages", "1-5,10", "--chunk-size", "5"])

    assert result.exit_code == 0
    assert "6 of 12 page(s) selected in 2 batch(es)" in result.output
    assert "1-5" in result.output


def test_plan_command_empty_selection(sample_pdf: Path) -> None:
    result = CliRunner().invoke(cli, ["plan", str(sample_pdf), "--pages", "30-40"])

    assert result.exit_code == 1
    assert "No valid pages selected" in result.output


def test_convert_command_writes_docx(sample_pdf: Path, tmp_path: Path) -> None:
    client = FakeStructuringClient(
        [
            sections_response({"type": "heading", "level": 1, "text": "Intro"}),
            sections_response({"type": "paragraph", "text": "Closing"}),
        ]
    )
    output_dir = tmp_path / "converted"

    with patch("smartpdf.cli.ConversionPipeline", _pipeline_factory(client)):
        result = CliRunner().invoke(
            cli,
            ["convert", str(sample_pdf), "--pages", "1-5, 10", "--output-dir", str(output_dir)],
        )

    assert result.exit_code == 0, result.output
    output_file = output_dir / "sample_p1-5_10.docx"
    assert output_file.exists()
    paragraphs = [p.text for p in Document(io.BytesIO(output_file.read_bytes())).paragraphs]
    assert paragraphs == ["Intro", "Closing"]
    assert "Successfully created" in result.output


def test_convert_command_reports_partial_result(sample_pdf: Path, tmp_path: Path) -> None:
    client = FakeStructuringClient([RuntimeError("quota"), sections_response()])

    with patch("smartpdf.cli.ConversionPipeline", _pipeline_factory(client)):
        result = CliRunner().invoke(
            cli,
            ["convert", str(sample_pdf), "-p", "1-6", "-o", str(tmp_path), "-n", "out.docx"],
        )

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out.docx").exists()
    assert "Partial result" in result.output


def test_convert_command_empty_selection_fails(sample_pdf: Path, tmp_path: Path) -> None:
    client = FakeStructuringClient([])

    with patch("smartpdf.cli.ConversionPipeline", _pipeline_factory(client)):
        result = CliRunner().invoke(cli, ["convert", str(sample_pdf), "-p", "0", "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert "No valid pages selected" in result.output
    assert client.calls == []


def test_convert_command_requires_api_key(sample_pdf: Path, monkeypatch) -> None:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)

    with patch("smartpdf.config.load_dotenv"):
        result = CliRunner().invoke(cli, ["convert", str(sample_pdf)])

    assert result.exit_code == 1
    assert "API key" in result.output


def test_batch_command_continues_after_failed_file(sample_pdf: Path, corrupt_pdf: Path, tmp_path: Path) -> None:
    client = FakeStructuringClient([sections_response({"type": "paragraph", "text": "Summary"})])
    output_dir = tmp_path / "converted"

    with patch("smartpdf.cli.ConversionPipeline", _pipeline_factory(client)):
        result = CliRunner().invoke(
            cli,
            ["batch", str(corrupt_pdf), str(sample_pdf), "--pages", "1-3", "--output-dir", str(output_dir)],
        )

    assert result.exit_code == 1
    output_file = output_dir / "sample_p1-3.docx"
    assert output_file.exists()
    paragraphs = [p.text for p in Document(io.BytesIO(output_file.read_bytes())).paragraphs]
    assert paragraphs == ["Summary"]
    assert "Failed Files" in result.output
    assert "corrupt.pdf" in result.output
    assert "Successful: 1" in result.output
    assert "Failed: 1" in result.output
    assert len(client.calls) == 1


def test_batch_command_expands_directories(make_pdf, tmp_path: Path) -> None:
    make_pdf(2, name="b.pdf")
    make_pdf(3, name="a.pdf")
    client = FakeStructuringClient([sections_response(), sections_response()])

    with patch("smartpdf.cli.ConversionPipeline", _pipeline_factory(client)):
        result = CliRunner().invoke(cli, ["batch", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "a.docx").exists()
    assert (tmp_path / "b.docx").exists()
    assert "Successful: 2" in result.output
