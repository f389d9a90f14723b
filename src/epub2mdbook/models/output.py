"""Data models for conversion output."""

from pathlib import Path

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
    """Summary of a finished EPUB to mdBook conversion."""

    book_dir: Path
    title: str
    author: str | None = None
    summary_path: Path
    book_toml_path: Path
    chapters_written: list[Path] = Field(default_factory=list)
    resources_copied: list[Path] = Field(default_factory=list)
    resources_skipped: list[str] = Field(default_factory=list)
