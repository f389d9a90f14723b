"""Retarget links in converted chapters from .xhtml files to .md files."""

import re
from urllib.parse import quote, unquote

# [label](target#fragment "title"); the label may hold one nested link or
# image, as in [![cover](i.png)](ch2.xhtml)
LINK = re.compile(
    r"\[(?P<label>(?:[^\[\]]|!?\[[^\]]*\]\([^)]*\))*)\]\("
    r"(?P<target>[^#)\s]+)"
    r"(?P<fragment>#[^)\s]*)?"
    r"(?P<title>\s+\"[^\"]*\")?"
    r"\)"
)
EMPTY_LINK = re.compile(r"\[([^\]]+)\]\(\)")
URL_LINK = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


def is_external(target: str) -> bool:
    """Check whether a link target starts with a URI scheme (https:, mailto:, ...)."""
    return URL_LINK.match(target) is not None


def _retarget_file_name(target: str, file_name_index: dict[str, str]) -> str | None:
    head, sep, file_name = target.rpartition("/")
    # Manifest names are percent-decoded, hrefs in the markup may not be
    decoded = unquote(file_name)
    md_file_name = file_name_index.get(decoded)
    if md_file_name is None:
        return None
    if decoded != file_name:
        md_file_name = quote(md_file_name)
    return head + sep + md_file_name


def _retarget(match: re.Match, file_name_index: dict[str, str]) -> str:
    label = LINK.sub(lambda m: _retarget(m, file_name_index), match.group("label"))
    target = match.group("target")
    if not is_external(target):
        target = _retarget_file_name(target, file_name_index) or target

    return (
        f"[{label}]("
        + target
        + (match.group("fragment") or "")
        + (match.group("title") or "")
        + ")"
    )


def strip_empty_links(markdown: str) -> str:
    """Drop empty images/links and unwrap links that lost their target.

    ``![]()`` and ``[]()`` disappear, ``[label]()`` becomes ``label``.
    """
    markdown = markdown.replace("![]()", "").replace("[]()", "")
    return EMPTY_LINK.sub(lambda m: m.group(1), markdown)


def rewrite_links(markdown: str, file_name_index: dict[str, str]) -> str:
    """Point internal links at the renamed Markdown files.

    Args:
        markdown: Converted chapter text
        file_name_index: Original HTML basename -> Markdown basename

    Returns:
        The text with matching internal links retargeted. External links,
        fragment-only links and links to unknown files are left alone.
    """
    markdown = LINK.sub(lambda m: _retarget(m, file_name_index), markdown)
    return strip_empty_links(markdown)
