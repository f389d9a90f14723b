"""Data models."""

from epub2mdbook.models.book import (
    HTML_MEDIA_TYPES,
    BookMetadata,
    NavEntry,
    ParsedBook,
    ResourceEntry,
)
from epub2mdbook.models.output import ConversionResult

__all__ = [
    # Book models
    "HTML_MEDIA_TYPES",
    "ResourceEntry",
    "NavEntry",
    "BookMetadata",
    "ParsedBook",
    # Output models
    "ConversionResult",
]
