"""
Command-line interface for pdftitlex.
"""

import os
import sys

import click
from rich.console import Console
from rich.table import Table

from pdftitlex import __version__
from pdftitlex.backends import PypdfBackend
from pdftitlex.exceptions import PDFTitleError
from pdftitlex.extractor import TitleExtractor
from pdftitlex.fonts import FontCache
from pdftitlex.interpreter import PageInterpreter
from pdftitlex.operations import decode_operations
from pdftitlex.types import ExtractionOptions
from pdftitlex.utils import configure_logging, sanitize_filename

console = Console()
error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
@click.option(
    '--log-level',
    default='WARNING',
    help='Logging level (DEBUG, INFO, WARNING, ERROR)',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False)
)
def cli(log_level):
    """
    pdftitlex - Find the title of a PDF from the text drawn largest.
    """
    configure_logging(log_level)


@cli.command(name="title")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--pages', '-n',
    default=2,
    show_default=True,
    help='Number of leading pages to scan',
    type=click.IntRange(min=0)
)
@click.option(
    '--reset-font',
    is_flag=True,
    help='Forget the active font at every BT operator'
)
@click.option(
    '--strict',
    is_flag=True,
    help='Skip the whole page when one text string cannot be decoded'
)
@click.option(
    '--filename', '-f',
    is_flag=True,
    help='Print the title sanitised for use as a file name'
)
@click.option(
    '--verbose', '-v',
    is_flag=True,
    help='Show font size, source page and skipped pages'
)
def title(input_pdf, pages, reset_font, strict, filename, verbose):
    """
    Print the title of a PDF.

    Examples:

        pdftitlex title paper.pdf

        pdftitlex title paper.pdf --pages 3 --filename
    """
    options = ExtractionOptions(
        page_limit=pages,
        reset_font_on_begin_text=reset_font,
        skip_malformed_text=not strict,
    )
    try:
        result = TitleExtractor(options).extract(input_pdf)
    except PDFTitleError as e:
        error_console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    text = sanitize_filename(result.title) if filename else result.title
    click.echo(text)

    if verbose:
        table = Table(title=f"Title: {os.path.basename(input_pdf)}", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("Font size", f"{result.font_size:g}")
        table.add_row(
            "Page",
            str(result.page_index + 1) if result.page_index is not None else "-"
        )
        table.add_row("Pages scanned", str(result.pages_scanned))
        for failure in result.failures:
            table.add_row("Skipped", str(failure))
        error_console.print(table)


@cli.command(name="inspect")
@click.argument('input_pdf', type=click.Path(exists=True, dir_okay=False))
@click.option(
    '--page', '-p',
    default=1,
    show_default=True,
    help='Page number to inspect (1-indexed)',
    type=click.IntRange(min=1)
)
@click.option(
    '--operations/--no-operations',
    default=False,
    help='Also list the decoded text operations'
)
def inspect(input_pdf, page, operations):
    """
    Show the text runs drawn at the largest font size on one page.

    Example:

        pdftitlex inspect paper.pdf --page 2 --operations
    """
    try:
        document = PypdfBackend().load(input_pdf)
        if page > document.num_pages:
            raise click.BadParameter(
                f"page {page} is out of range (document has {document.num_pages} pages)",
                param_hint="--page"
            )
        page_obj = document.reader.pages[page - 1]
        decoded = decode_operations(page_obj)
        font_cache = FontCache.from_page(page_obj, document.resolve)
        page_text = PageInterpreter(resolve=document.resolve).interpret_operations(
            decoded, font_cache, page_index=page - 1
        )
    except PDFTitleError as e:
        error_console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)

    if operations:
        console.print("\n[bold]Operations:[/bold]")
        for operation in decoded:
            console.print(operation.describe(), markup=False, highlight=False)

    table = Table(title=f"Page {page}: largest text (size {page_text.max_font_size:g})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Text", style="green")
    table.add_column("Size", style="cyan", justify="right")
    table.add_column("Baseline", style="cyan", justify="right")
    for number, run in enumerate(page_text.runs, start=1):
        table.add_row(str(number), run.text, f"{run.font_size:g}", f"{run.y:g}")

    console.print()
    console.print(table)
    console.print(f"[dim]Fonts on page: {len(font_cache)}[/dim]")
    if page_text.dropped_runs:
        console.print(f"[yellow]Dropped {page_text.dropped_runs} undecodable run(s)[/yellow]")
    console.print()


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
