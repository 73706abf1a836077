"""Command-line interface for textanchor."""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import typer
import yaml
from lxml import etree
from rich.console import Console

from textanchor import __version__
from textanchor.chunker import Chunker, TextChunk
from textanchor.config import DEFAULT_ENCODING
from textanchor.errors import AnchoringError
from textanchor.logging_config import setup_logging
from textanchor.selectors import Match, TextPositionSelector, selector_from_annotation
from textanchor.sources import TextChunkSource
from textanchor.text_position import resolve_text_position
from textanchor.text_quote import describe_text_quote
from textanchor.xml import ElementChunker, ElementTextChunk, describe_boundary, range_to_boundaries

app = typer.Typer(
    name="textanchor",
    help="Describe and resolve W3C text selectors in text and XML files.",
)
console = Console()

XML_OPTION = typer.Option(False, "--xml", help="Read the file as XML, one chunk per text node")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Log each anchoring step")


def load_scope(path: Path, xml: bool) -> Callable[[], Chunker[Any]]:
    """Chunk a file: one chunk per XML text node, or one per line."""
    if xml:
        root = etree.parse(str(path)).getroot()
        return lambda: ElementChunker(root)
    text = path.read_text(encoding=DEFAULT_ENCODING)
    return TextChunkSource(text.splitlines(keepends=True))


def _where(match: Match) -> str:
    found = match.range
    if isinstance(found.start_chunk, ElementTextChunk):
        start, end = range_to_boundaries(found)
        return f"{describe_boundary(start)} .. {describe_boundary(end)}"
    if isinstance(found.start_chunk, TextChunk):
        return (
            f"line {found.start_chunk.index + 1} col {found.start_index + 1} .. "
            f"line {found.end_chunk.index + 1} col {found.end_index + 1}"
        )
    return repr(found)


@app.command()
def describe(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text or XML file"),
    start: int = typer.Argument(..., help="Code point offset where the span starts"),
    end: int = typer.Argument(..., help="Code point offset where the span ends"),
    xml: bool = XML_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print the shortest unambiguous quote selector for a span of a file."""
    if verbose:
        setup_logging(logging.DEBUG)

    try:
        scope = load_scope(file, xml)
        position = TextPositionSelector(start=start, end=end)
        target = resolve_text_position(position, scope())
        quote = describe_text_quote(target, scope)
    except (AnchoringError, OSError, etree.XMLSyntaxError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    console.print(quote.to_annotation(), markup=False, highlight=False, soft_wrap=True, end="")
    console.print("---", markup=False)
    console.print(position.to_annotation(), markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
def locate(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Text or XML file"),
    annotation: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="YAML annotation with a target.selector"
    ),
    xml: bool = XML_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Resolve an annotation's selector in a file and list every match."""
    if verbose:
        setup_logging(logging.DEBUG)

    try:
        selector = selector_from_annotation(annotation.read_text(encoding=DEFAULT_ENCODING))
        result = selector.locate(load_scope(file, xml))
    except (AnchoringError, OSError, etree.XMLSyntaxError, yaml.YAMLError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e

    console.print(f"[bold]{result.status.value.upper()}[/bold] ({len(result.matches)} matches)")
    for match in result.matches:
        console.print(f"  {_where(match)}: ", end="")
        console.print(repr(match.matched_text), markup=False, highlight=False, soft_wrap=True)

    if not result.found:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"textanchor {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
