"""Data models for the parsed EPUB structure."""

from pydantic import BaseModel, Field

HTML_MEDIA_TYPES = frozenset({"application/xhtml+xml", "text/html"})


class ResourceEntry(BaseModel):
    """Single file declared in the EPUB manifest."""

    id: str
    path: str  # Relative to the package document, POSIX separators
    media_type: str

    model_config = {"frozen": True}

    @property
    def is_html(self) -> bool:
        return self.media_type in HTML_MEDIA_TYPES


class NavEntry(BaseModel):
    """Single entry in the navigation tree."""

    label: str
    href: str = ""
    children: list["NavEntry"] = Field(default_factory=list)

    @property
    def path(self) -> str:
        """Resource path without the fragment."""
        return self.href.split("#", 1)[0]

    @property
    def fragment(self) -> str | None:
        if "#" not in self.href:
            return None
        return self.href.split("#", 1)[1]


class BookMetadata(BaseModel):
    """Book-level metadata."""

    title: str
    authors: list[str] = Field(default_factory=list)
    language: str | None = None
    publisher: str | None = None

    @property
    def author(self) -> str | None:
        """First creator, used for book.toml."""
        return self.authors[0] if self.authors else None


class ParsedBook(BaseModel):
    """Complete parsed EPUB structure."""

    metadata: BookMetadata
    resources: list[ResourceEntry] = Field(default_factory=list)
    toc: list[NavEntry] = Field(default_factory=list)
