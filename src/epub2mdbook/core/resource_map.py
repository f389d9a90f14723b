"""Map HTML resources to their Markdown output paths."""

import posixpath
from collections.abc import Iterable

from epub2mdbook.models.book import ResourceEntry

SUMMARY_FILE_NAME = "SUMMARY.md"
RESERVED_SUMMARY_REPLACEMENT = "_SUMMARY.md"


def to_markdown_path(path: str) -> str:
    """Swap the extension of an EPUB-internal path for ``.md``.

    The directory part is kept as is; a path without an extension
    simply gains ``.md``.
    """
    root, _ = posixpath.splitext(path)
    return f"{root}.md"


def build_resource_map(resources: Iterable[ResourceEntry]) -> dict[str, str]:
    """Build the original path -> Markdown path table for HTML resources."""
    return {r.path: to_markdown_path(r.path) for r in resources if r.is_html}


def resolve_reserved_names(resource_map: dict[str, str]) -> dict[str, str]:
    """Return a copy of the map that never targets the generated SUMMARY.md."""
    return {
        source: RESERVED_SUMMARY_REPLACEMENT if target == SUMMARY_FILE_NAME else target
        for source, target in resource_map.items()
    }


def build_file_name_index(resource_map: dict[str, str]) -> dict[str, str]:
    """Build the basename -> basename table used by the link rewriter.

    After conversion a chapter only carries the href as written in the
    source markup, so matching is done on the final path segment.
    """
    index: dict[str, str] = {}
    for source, target in resource_map.items():
        source_name = posixpath.basename(source)
        target_name = posixpath.basename(target)
        if source_name and target_name:
            index[source_name] = target_name
    return index
