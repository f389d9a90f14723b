"""Render the navigation tree as an mdBook SUMMARY.md."""

import logging
import re
from collections.abc import Iterable

from epub2mdbook.models.book import NavEntry

log = logging.getLogger(__name__)

INDENT = "  "
LABEL_SPECIALS = re.compile(r"([\\\[\]])")


def escape_label(label: str) -> str:
    """Backslash-escape characters that would end a Markdown link label."""
    return LABEL_SPECIALS.sub(r"\\\1", label)


def format_destination(target: str) -> str:
    """Wrap link destinations mdBook cannot read bare in angle brackets."""
    if any(c.isspace() or c in "()" for c in target):
        return f"<{target}>"
    return target


def render_nav_entry(
    entry: NavEntry, depth: int, resource_map: dict[str, str]
) -> str | None:
    """Render one entry and its children as nested list items.

    Returns None when the entry's resource is not in the map; the whole
    subtree is then left out, since children are only visited once their
    parent resolved.
    """
    target = resource_map.get(entry.path)
    if target is None:
        log.debug(f"Skipping TOC entry without chapter: {entry.label!r} ({entry.href})")
        return None

    if entry.fragment:
        target = f"{target}#{entry.fragment}"

    label = escape_label(entry.label)
    lines = [f"{INDENT * depth}- [{label}]({format_destination(target)})\n"]
    for child in entry.children:
        child_md = render_nav_entry(child, depth + 1, resource_map)
        if child_md is not None:
            lines.append(child_md)
    return "".join(lines)


def render_summary(
    toc: Iterable[NavEntry], title: str, resource_map: dict[str, str]
) -> str:
    """Render the full SUMMARY.md document for a book."""
    summary = [f"# {title}\n\n"]
    for entry in toc:
        entry_md = render_nav_entry(entry, 0, resource_map)
        if entry_md is not None:
            summary.append(entry_md)
    return "".join(summary)
