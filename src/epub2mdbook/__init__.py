"""Convert EPUB e-books into mdBook source trees."""

from epub2mdbook.core.converter import convert_epub_to_mdbook
from epub2mdbook.errors import (
    ConversionError,
    EpubReadError,
    InvalidEncodingError,
    NotAFileError,
)

__version__ = "0.1.0"

__all__ = [
    "convert_epub_to_mdbook",
    "ConversionError",
    "EpubReadError",
    "InvalidEncodingError",
    "NotAFileError",
]
