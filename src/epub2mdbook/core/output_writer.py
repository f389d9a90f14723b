"""Write the mdBook source tree."""

import json
import logging
from pathlib import Path

from epub2mdbook.core.content_processor import ContentProcessor
from epub2mdbook.core.epub_parser import EpubParser
from epub2mdbook.core.link_rewriter import rewrite_links
from epub2mdbook.core.resource_map import (
    RESERVED_SUMMARY_REPLACEMENT,
    SUMMARY_FILE_NAME,
)
from epub2mdbook.errors import InvalidEncodingError
from epub2mdbook.models.book import ResourceEntry

log = logging.getLogger(__name__)

SRC_DIR_NAME = "src"
BOOK_TOML_NAME = "book.toml"


def toml_string(value: str) -> str:
    """Quote a value as a TOML basic string."""
    # JSON string escapes are a subset of TOML basic string escapes; DEL is
    # legal in JSON but not in TOML
    return json.dumps(value, ensure_ascii=False).replace("\x7f", "\\u007F")


class OutputWriter:
    """Write chapters, resources, SUMMARY.md and book.toml for one book."""

    def __init__(self, book_dir: Path, processor: ContentProcessor | None = None):
        """Initialize output writer.

        Args:
            book_dir: Root of the mdBook (book.toml lives here)
            processor: HTML to Markdown converter, a default one if omitted
        """
        self.book_dir = book_dir
        self.src_dir = book_dir / SRC_DIR_NAME
        self.src_dir.mkdir(parents=True, exist_ok=True)
        self.processor = processor or ContentProcessor()

        self.chapters_written: list[Path] = []
        self.resources_copied: list[Path] = []
        self.resources_skipped: list[str] = []

    def chapter_target(self, md_path: str) -> Path:
        """Output file for a converted chapter, avoiding the generated SUMMARY.md."""
        if md_path == SUMMARY_FILE_NAME:
            return self.src_dir / RESERVED_SUMMARY_REPLACEMENT
        return self.src_dir / md_path

    def write_chapter(
        self, resource: ResourceEntry, content: bytes, md_path: str, file_name_index: dict[str, str]
    ) -> Path:
        """Convert one HTML resource and write it as Markdown."""
        try:
            html = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncodingError(resource.path, str(e)) from e

        markdown = self.processor.to_markdown(html)
        markdown = rewrite_links(markdown, file_name_index)

        target_path = self.chapter_target(md_path)
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_text(markdown, encoding="utf-8")
        self.chapters_written.append(target_path)
        log.debug(f"Wrote chapter {resource.path} -> {target_path}")
        return target_path

    def copy_resource(self, resource: ResourceEntry, content: bytes) -> Path:
        """Write a non-HTML resource byte for byte."""
        target_path = self.src_dir / resource.path
        target_path.parent.mkdir(parents=True, exist_ok=True)
        target_path.write_bytes(content)
        self.resources_copied.append(target_path)
        log.debug(f"Copied resource {resource.path}")
        return target_path

    def extract_resources(
        self,
        parser: EpubParser,
        resources: list[ResourceEntry],
        resource_map: dict[str, str],
        file_name_index: dict[str, str],
    ) -> None:
        """Convert HTML resources to Markdown and copy everything else."""
        for resource in resources:
            content = parser.read_resource(resource.path)
            if content is None:
                log.warning(f"Resource declared but not found in archive: {resource.path}")
                self.resources_skipped.append(resource.path)
                continue

            md_path = resource_map.get(resource.path)
            if md_path is not None:
                self.write_chapter(resource, content, md_path, file_name_index)
            else:
                self.copy_resource(resource, content)

        log.info(
            f"Extracted {len(self.chapters_written)} chapter(s) and "
            f"{len(self.resources_copied)} resource(s)"
        )

    def write_summary(self, summary_md: str) -> Path:
        """Write the generated table of contents."""
        filepath = self.src_dir / SUMMARY_FILE_NAME
        filepath.write_text(summary_md, encoding="utf-8")
        return filepath

    def write_book_toml(self, title: str, author: str | None = None) -> Path:
        """Write the minimal mdBook configuration."""
        lines = ["[book]", f"title = {toml_string(title)}"]
        if author:
            lines.append(f"author = {toml_string(author)}")

        filepath = self.book_dir / BOOK_TOML_NAME
        filepath.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return filepath
