"""EPUB to mdBook conversion."""

import logging
from pathlib import Path

from epub2mdbook.core.epub_parser import EpubParser
from epub2mdbook.core.output_writer import OutputWriter
from epub2mdbook.core.resource_map import (
    build_file_name_index,
    build_resource_map,
    resolve_reserved_names,
)
from epub2mdbook.core.toc_renderer import render_summary
from epub2mdbook.errors import NotAFileError
from epub2mdbook.models.output import ConversionResult

log = logging.getLogger(__name__)


def get_book_dir(epub_path: Path, output_dir: Path | None, nested: bool = True) -> Path:
    """Directory that will hold book.toml and src/."""
    base = output_dir if output_dir is not None else Path(".")
    return base / epub_path.stem if nested else base


def convert_epub_to_mdbook(
    epub_path: Path | str,
    output_dir: Path | str | None = None,
    nested: bool = True,
) -> ConversionResult:
    """Convert an EPUB file to an mdBook.

    Args:
        epub_path: Path to the EPUB file
        output_dir: Output directory, current directory by default
        nested: Write into ``<output_dir>/<book name>`` instead of
            ``output_dir`` itself

    Returns:
        ConversionResult describing what was written

    Raises:
        NotAFileError: If epub_path is not a regular file
        EpubReadError: If the EPUB cannot be opened
        InvalidEncodingError: If a chapter is not valid UTF-8
        OSError: On directory creation or write failures
    """
    epub_path = Path(epub_path)
    if not epub_path.is_file():
        raise NotAFileError(epub_path)

    book_name = epub_path.stem
    book_dir = get_book_dir(
        epub_path, Path(output_dir) if output_dir is not None else None, nested
    )
    log.info(f"Converting {epub_path} into {book_dir}")

    writer = OutputWriter(book_dir)

    parser = EpubParser(epub_path)
    parsed = parser.parse()
    title = parsed.metadata.title or book_name
    author = parsed.metadata.author

    resource_map = resolve_reserved_names(build_resource_map(parsed.resources))
    file_name_index = build_file_name_index(resource_map)
    summary_md = render_summary(parsed.toc, title, resource_map)

    writer.extract_resources(parser, parsed.resources, resource_map, file_name_index)
    summary_path = writer.write_summary(summary_md)
    book_toml_path = writer.write_book_toml(title, author)
    log.info(f"Wrote {summary_path} and {book_toml_path}")

    return ConversionResult(
        book_dir=book_dir,
        title=title,
        author=author,
        summary_path=summary_path,
        book_toml_path=book_toml_path,
        chapters_written=writer.chapters_written,
        resources_copied=writer.resources_copied,
        resources_skipped=writer.resources_skipped,
    )
