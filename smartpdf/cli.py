"""
Command-line interface for SmartPDF.
"""

import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, TaskProgressColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from smartpdf import __version__
from smartpdf.config import Settings
from smartpdf.document import SourceDocument
from smartpdf.exceptions import SmartPDFException
from smartpdf.pipeline import BatchConverter, ConversionPipeline, find_pdf_files
from smartpdf.segmenter import chunk_indices
from smartpdf.selection import format_page_label, parse_page_selection
from smartpdf.utils import configure_logging, format_file_size

console = Console()


def _fail(error):
    console.print(f"\n[bold red]✗ Error:[/bold red] {error}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    SmartPDF - Convert PDF pages into structured, editable Word documents.
    """
    pass


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--password', help='Password for encrypted PDFs', type=str)
def show_info(input_pdf, password):
    """
    Display information about a PDF file.

    Example:

        smartpdf info input.pdf
    """
    try:
        info = SourceDocument(input_pdf, password=password).to_pdf_info()
    except SmartPDFException as e:
        _fail(e)

    table = Table(title=f"PDF Information: {os.path.basename(input_pdf)}")
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    table.add_row("File Path", os.path.abspath(input_pdf))
    table.add_row("File Size", format_file_size(info.file_size))
    table.add_row("Number of Pages", str(info.num_pages))
    table.add_row("Encrypted", "Yes" if info.is_encrypted else "No")
    if info.title:
        table.add_row("Title", str(info.title))
    if info.author:
        table.add_row("Author", str(info.author))
    if info.subject:
        table.add_row("Subject", str(info.subject))
    if info.fonts:
        table.add_row("Fonts", ", ".join(info.fonts))

    console.print()
    console.print(table)
    console.print()


@cli.command(name="plan")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--pages', '-p', default='', help="Pages to convert (e.g., '1-5, 10'); all pages if omitted", type=str)
@click.option('--chunk-size', '-s', default=None, help='Pages sent per request', type=int)
@click.option('--password', help='Password for encrypted PDFs', type=str)
def plan(input_pdf, pages, chunk_size, password):
    """
    Show which pages would be converted and how they are batched.

    No requests are sent.

    Examples:

        smartpdf plan input.pdf

        smartpdf plan input.pdf -p '1-12, 20' -s 4
    """
    try:
        settings = Settings.from_env().replace(chunk_size=chunk_size).check()
        document = SourceDocument(input_pdf, password=password)
        selection = parse_page_selection(pages, document.num_pages)
        groups = chunk_indices(selection, settings.chunk_size)
    except SmartPDFException as e:
        _fail(e)

    if not selection:
        _fail(f"No valid pages selected for conversion: '{pages}' (document has {document.num_pages} pages).")

    console.print(
        f"\n[bold cyan]{len(selection)} of {document.num_pages} page(s) selected "
        f"in {len(groups)} batch(es)[/bold cyan]"
    )
    table = Table(title="Conversion Plan")
    table.add_column("Batch", style="cyan", justify="right")
    table.add_column("Pages", style="green")
    table.add_column("Count", justify="right")
    for index, group in enumerate(groups, start=1):
        table.add_row(str(index), format_page_label(group), str(len(group)))
    console.print(table)
    console.print()


@cli.command(name="convert")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option('--pages', '-p', default='', help="Pages to convert (e.g., '1-5, 10'); all pages if omitted", type=str)
@click.option(
    '--output-dir', '-o',
    default=None,
    help='Output directory (defaults to the PDF directory)',
    type=click.Path(file_okay=False)
)
@click.option('--output-name', '-n', help='Custom output filename', type=str)
@click.option('--chunk-size', '-s', default=None, help='Pages sent per request', type=int)
@click.option('--model', '-m', default=None, help='Gemini model name', type=str)
@click.option('--retries', default=None, help='Extra attempts for a failing batch', type=int)
@click.option('--api-key', envvar='GEMINI_API_KEY', default=None, help='Gemini API key', type=str)
@click.option('--password', help='Password for encrypted PDFs', type=str)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def convert(input_pdf, pages, output_dir, output_name, chunk_size, model, retries, api_key, password, verbose):
    """
    Convert a PDF into a structured Word document.

    Examples:

        smartpdf convert input.pdf

        smartpdf convert input.pdf -p '1-5, 10' -o converted

        smartpdf convert input.pdf --chunk-size 3 --retries 2
    """
    try:
        settings = Settings.from_env().replace(
            api_key=api_key,
            chunk_size=chunk_size,
            model_name=model,
            max_retries=retries,
        )
        configure_logging("DEBUG" if verbose else settings.log_level)
        pipeline = ConversionPipeline(settings=settings)

        console.print(f"\n[bold cyan]Converting {os.path.basename(input_pdf)}...[/bold cyan]")
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console
        ) as progress:
            task = progress.add_task("Starting", total=100)

            def update_progress(percent, message):
                progress.update(task, completed=percent, description=message)

            result = pipeline.convert(input_pdf, pages, password=password, on_progress=update_progress)

        destination_dir = output_dir or os.path.dirname(os.path.abspath(input_pdf))
        os.makedirs(destination_dir, exist_ok=True)
        output_file = result.save(os.path.join(destination_dir, output_name or result.filename))
    except SmartPDFException as e:
        _fail(e)
    except Exception as e:
        _fail(f"Unexpected failure: {e}")

    table = Table(title="Batches")
    table.add_column("Batch", style="cyan", justify="right")
    table.add_column("Pages", style="green")
    table.add_column("Sections", justify="right")
    table.add_column("Status")
    for outcome in result.extraction.outcomes:
        status = "[green]ok[/green]" if outcome.success else f"[red]failed[/red] {escape(outcome.error or '')}"
        table.add_row(
            str(outcome.index + 1),
            format_page_label(outcome.pages),
            str(len(outcome.sections)),
            status,
        )
    console.print(table)

    if result.partial:
        console.print(
            f"[bold yellow]! Partial result:[/bold yellow] "
            f"{len(result.extraction.failed_chunks)} batch(es) failed, "
            f"{len(result.rendering.skipped_sections)} section(s) skipped"
        )
    console.print(f"\n[bold green]✓ Successfully created:[/bold green] {output_file}")
    console.print()


@cli.command(name="batch")
@click.argument('inputs', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--pages', '-p', default='', help="Pages to convert in every file; all pages if omitted", type=str)
@click.option(
    '--output-dir', '-o',
    default=None,
    help='Output directory (defaults to each PDF directory)',
    type=click.Path(file_okay=False)
)
@click.option('--chunk-size', '-s', default=None, help='Pages sent per request', type=int)
@click.option('--model', '-m', default=None, help='Gemini model name', type=str)
@click.option('--retries', default=None, help='Extra attempts for a failing batch', type=int)
@click.option('--api-key', envvar='GEMINI_API_KEY', default=None, help='Gemini API key', type=str)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def batch(inputs, pages, output_dir, chunk_size, model, retries, api_key, verbose):
    """
    Convert several PDF files one after another.

    INPUTS may be PDF files or directories; directories contribute their
    *.pdf files in name order.

    Examples:

        smartpdf batch ./pdfs

        smartpdf batch a.pdf b.pdf -p '1-3' -o converted
    """
    try:
        settings = Settings.from_env().replace(
            api_key=api_key,
            chunk_size=chunk_size,
            model_name=model,
            max_retries=retries,
        )
        configure_logging("DEBUG" if verbose else settings.log_level)
        converter = BatchConverter(ConversionPipeline(settings=settings))
        pdf_files = find_pdf_files(inputs)
    except SmartPDFException as e:
        _fail(e)

    if not pdf_files:
        console.print("\n[bold yellow]⚠ No PDF files found[/bold yellow]")
        sys.exit(0)

    console.print(f"\n[bold green]✓ Found {len(pdf_files)} PDF file(s)[/bold green]\n")
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console
    ) as progress:
        task = progress.add_task("Converting PDFs", total=len(pdf_files))

        def update_progress(filename, current, total):
            progress.update(task, completed=current - 1, description=f"Converting: {filename}")

        results = converter.convert_all(pdf_files, pages, output_dir, progress_callback=update_progress)
        progress.update(task, completed=len(pdf_files), description="Done")

    table = Table(title="Batch Conversion Summary")
    table.add_column("File", style="cyan")
    table.add_column("Pages", justify="right")
    table.add_column("Sections", justify="right")
    table.add_column("Status")
    table.add_column("Output", style="green")
    for outcome in results.outcomes:
        if outcome.success:
            converted = outcome.result
            status = "[yellow]partial[/yellow]" if converted.partial else "[green]ok[/green]"
            table.add_row(
                outcome.source.name,
                str(len(converted.page_selection)),
                str(len(converted.document)),
                status,
                str(outcome.output),
            )
        else:
            table.add_row(outcome.source.name, "-", "-", f"[red]failed[/red] {escape(outcome.error)}", "")
    console.print(table)

    if results.failure > 0:
        console.print("\n[bold red]Failed Files:[/bold red]")
        for outcome in results.outcomes:
            if not outcome.success:
                console.print(f"  ✗ {escape(outcome.source.name)}: {escape(outcome.error)}")

    console.print(
        f"\n[bold]Total:[/bold] {results.total}  "
        f"[green]✓ Successful: {results.success}[/green]  "
        f"[red]✗ Failed: {results.failure}[/red]"
    )
    console.print()
    sys.exit(0 if results.failure == 0 else 1)


if __name__ == '__main__':
    cli()
