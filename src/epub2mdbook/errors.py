"""Exceptions raised while converting an EPUB into an mdBook."""

from pathlib import Path


class ConversionError(Exception):
    """Base class for conversion failures."""


class NotAFileError(ConversionError):
    """The input path does not reference a regular file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"{path} is not a file")


class EpubReadError(ConversionError):
    """ebooklib could not open or parse the EPUB container."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"EPUB error: {path}: {reason}")


class InvalidEncodingError(ConversionError):
    """An HTML resource is not valid UTF-8."""

    def __init__(self, resource_path: str, reason: str):
        self.resource_path = resource_path
        self.reason = reason
        super().__init__(f"Invalid UTF-8 in {resource_path}: {reason}")
