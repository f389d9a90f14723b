import pytest
from pathlib import Path

from ebooklib import epub

CHAPTER_ONE = """<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Chapter 1</title></head>
<body>
<h1>Chapter 1</h1>
<p>See <a href="ch1.xhtml#sec2">link</a> and <a href="text/ch2.xhtml">the next one</a>.</p>
<p>Visit <a href="https://example.com/ch1.xhtml">the site</a>.</p>
<h2 id="sec2">Section 2</h2>
<p><img src="images/cover.jpg" alt="cover"/></p>
</body>
</html>
"""

CHAPTER_TWO = """<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Chapter 2</title></head>
<body>
<h1>Chapter 2</h1>
<p>Back to <a href="../ch1.xhtml">the start</a>.</p>
</body>
</html>
"""

COVER_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00fake-jpeg-payload\xff\xd9"


def _new_book(title: str | None, author: str | None) -> epub.EpubBook:
    book = epub.EpubBook()
    book.set_identifier("epub2mdbook-test")
    if title is not None:
        book.set_title(title)
    book.set_language("en")
    if author is not None:
        book.add_author(author)
    return book


def _finish(book: epub.EpubBook, spine: list, path: Path) -> Path:
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", *spine]
    epub.write_epub(str(path), book)
    return path


@pytest.fixture
def demo_epub(tmp_path) -> Path:
    """Two chapters, one in a subdirectory, plus a cover image."""
    book = _new_book("Demo", "Jane Doe")

    ch1 = epub.EpubHtml(uid="ch1", title="Chapter 1", file_name="ch1.xhtml", lang="en")
    ch1.content = CHAPTER_ONE
    ch2 = epub.EpubHtml(uid="ch2", title="Chapter 2", file_name="text/ch2.xhtml", lang="en")
    ch2.content = CHAPTER_TWO
    cover = epub.EpubItem(
        uid="cover-image",
        file_name="images/cover.jpg",
        media_type="image/jpeg",
        content=COVER_BYTES,
    )
    for item in (ch1, ch2, cover):
        book.add_item(item)

    book.toc = [
        (
            epub.Section("Chapter 1", href="ch1.xhtml"),
            [epub.Link("text/ch2.xhtml", "Chapter 2", "ch2")],
        ),
    ]
    return _finish(book, [ch1, ch2], tmp_path / "demo.epub")


@pytest.fixture
def make_epub(tmp_path):
    """Build a small EPUB from (file_name, media_type, content) tuples."""

    def _make(
        items: list[tuple[str, str, bytes]],
        name: str = "book.epub",
        title: str | None = "Test Book",
        author: str | None = None,
    ) -> Path:
        book = _new_book(title, author)
        spine = []
        for i, (file_name, media_type, content) in enumerate(items):
            item = epub.EpubItem(
                uid=f"item{i}",
                file_name=file_name,
                media_type=media_type,
                content=content,
            )
            book.add_item(item)
        book.toc = []
        return _finish(book, spine, tmp_path / name)

    return _make
