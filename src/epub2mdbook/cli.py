"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.tree import Tree

from epub2mdbook.core.converter import convert_epub_to_mdbook
from epub2mdbook.core.epub_parser import EpubParser
from epub2mdbook.core.resource_map import build_resource_map, resolve_reserved_names
from epub2mdbook.errors import NotAFileError
from epub2mdbook.models.book import NavEntry

app = typer.Typer(
    name="epub2mdbook",
    help="Convert EPUB e-books into mdBook source trees.",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for a CLI run."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger("epub2mdbook").setLevel(level)
    # ebooklib and bs4 are chatty at DEBUG
    logging.getLogger("ebooklib").setLevel(logging.WARNING)
    logging.getLogger("bs4").setLevel(logging.WARNING)


@app.command()
def convert(
    epub_path: Annotated[
        Path,
        typer.Argument(help="Path to the input EPUB file"),
    ],
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: current directory)",
        ),
    ] = None,
    flat: Annotated[
        bool,
        typer.Option(
            "--flat",
            help="Write book.toml and src/ directly into the output directory "
            "instead of a subdirectory named after the book",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress progress output"),
    ] = False,
) -> None:
    """Convert an EPUB file into an mdBook (book.toml + src/)."""
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        if quiet:
            result = convert_epub_to_mdbook(epub_path, output_dir, nested=not flat)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task(f"Converting {epub_path.name}...", total=None)
                result = convert_epub_to_mdbook(epub_path, output_dir, nested=not flat)
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    if not quiet:
        summary_lines = [
            "[green]Conversion completed successfully![/]",
            "",
            f"[dim]Title:[/] {result.title}",
            f"[dim]Author:[/] {result.author or 'Unknown'}",
            f"[dim]Book directory:[/] {result.book_dir}",
            f"[dim]Chapters:[/] {len(result.chapters_written)}",
            f"[dim]Resources copied:[/] {len(result.resources_copied)}",
        ]
        if result.resources_skipped:
            summary_lines.append(
                f"[yellow]Skipped {len(result.resources_skipped)} missing resource(s)[/]"
            )
        console.print(Panel("\n".join(summary_lines), title="Complete", border_style="green"))


def _add_nav_nodes(
    tree: Tree, entries: list[NavEntry], resource_map: dict[str, str]
) -> None:
    for entry in entries:
        target = resource_map.get(entry.path)
        if target is None:
            tree.add(f"[dim strike]{entry.label}[/] [dim]({entry.href or 'no link'})[/]")
            continue
        node = tree.add(f"{entry.label} [dim]-> {target}[/]")
        _add_nav_nodes(node, entry.children, resource_map)


@app.command()
def info(
    epub_path: Annotated[
        Path,
        typer.Argument(help="Path to the EPUB file"),
    ],
) -> None:
    """Display book metadata and the table of contents as it will be converted."""
    setup_logging(quiet=True)

    try:
        if not epub_path.is_file():
            raise NotAFileError(epub_path)
        parsed = EpubParser(epub_path).parse()
    except Exception as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)

    resource_map = resolve_reserved_names(build_resource_map(parsed.resources))
    info_lines = [
        f"[bold]{parsed.metadata.title}[/]",
        "",
        f"[dim]Author(s):[/] {', '.join(parsed.metadata.authors) or 'Unknown'}",
        f"[dim]Language:[/] {parsed.metadata.language or 'Unknown'}",
        f"[dim]Publisher:[/] {parsed.metadata.publisher or 'Unknown'}",
        f"[dim]Chapters:[/] {len(resource_map)}",
        f"[dim]Other resources:[/] {len(parsed.resources) - len(resource_map)}",
    ]

    console.print()
    console.print(Panel("\n".join(info_lines), title="Book Information", border_style="green"))

    tree = Tree("[bold cyan]Table of Contents[/]")
    _add_nav_nodes(tree, parsed.toc, resource_map)
    console.print()
    console.print(tree)
    console.print()


if __name__ == "__main__":
    app()
