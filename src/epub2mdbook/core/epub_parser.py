"""EPUB parsing using ebooklib."""

import logging
import warnings
from pathlib import Path
from urllib.parse import unquote

from ebooklib import epub

from epub2mdbook.errors import EpubReadError
from epub2mdbook.models.book import BookMetadata, NavEntry, ParsedBook, ResourceEntry

# ebooklib warns about its future ignore_ncx default on every read
warnings.filterwarnings("ignore", category=UserWarning, module="ebooklib")
warnings.filterwarnings("ignore", category=FutureWarning, module="ebooklib")

log = logging.getLogger(__name__)


class EpubParser:
    """Parse EPUB files and expose their manifest, TOC and metadata."""

    def __init__(self, epub_path: Path):
        self.path = epub_path
        try:
            self.book = epub.read_epub(str(epub_path))
        except Exception as e:
            raise EpubReadError(epub_path, str(e) or type(e).__name__) from e

    def parse(self) -> ParsedBook:
        """Parse the EPUB and return complete structure."""
        return ParsedBook(
            metadata=self.get_metadata(),
            resources=self.get_resources(),
            toc=self.get_toc(),
        )

    def get_metadata(self, default_title: str | None = None) -> BookMetadata:
        """Extract book metadata.

        Args:
            default_title: Title to use when the package has no dc:title,
                defaults to the EPUB file name without extension
        """
        title = self.book.get_metadata("DC", "title")
        authors = self.book.get_metadata("DC", "creator")
        language = self.book.get_metadata("DC", "language")
        publisher = self.book.get_metadata("DC", "publisher")

        return BookMetadata(
            title=title[0][0] if title and title[0][0] else default_title or self.path.stem,
            authors=[a[0] for a in authors if a[0]] if authors else [],
            language=language[0][0] if language else None,
            publisher=publisher[0][0] if publisher else None,
        )

    def get_resources(self) -> list[ResourceEntry]:
        """List every manifest item with its path and media type."""
        resources = []
        for item in self.book.get_items():
            name = item.get_name()
            resources.append(
                ResourceEntry(
                    id=item.get_id() or name,
                    path=name,
                    media_type=item.media_type or "",
                )
            )
        log.debug(f"Found {len(resources)} resources in {self.path.name}")
        return resources

    def get_toc(self) -> list[NavEntry]:
        """Extract hierarchical table of contents."""
        return self._parse_toc_recursive(self.book.toc)

    def _parse_toc_recursive(self, toc_items: list) -> list[NavEntry]:
        """Recursively parse TOC structure."""
        entries = []

        for item in toc_items:
            if isinstance(item, tuple):
                # Section with children: (Section, [children])
                section, children = item
                entry = self._to_nav_entry(section)
                entry.children = self._parse_toc_recursive(children)
            else:
                entry = self._to_nav_entry(item)
            entries.append(entry)

        return entries

    def _to_nav_entry(self, item) -> NavEntry:
        if isinstance(item, epub.EpubHtml):
            return NavEntry(label=item.title or item.get_name(), href=item.get_name())
        return NavEntry(
            label=getattr(item, "title", None) or "Untitled",
            href=self._normalize_href(getattr(item, "href", None) or ""),
        )

    def _normalize_href(self, href: str) -> str:
        """Percent-decode the path part so it matches manifest names."""
        path, sep, fragment = href.partition("#")
        return f"{unquote(path)}{sep}{fragment}"

    def read_resource(self, path: str) -> bytes | None:
        """Return the archive bytes of a manifest item, or None if it is missing."""
        item = self.book.get_item_with_href(path)
        if item is None:
            return None
        # EpubHtml.get_content() re-serialises the document; keep the stored bytes
        return item.content
