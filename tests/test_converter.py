"""End-to-end conversion tests."""

import pytest

from epub2mdbook import (
    EpubReadError,
    InvalidEncodingError,
    NotAFileError,
    convert_epub_to_mdbook,
)

from conftest import COVER_BYTES

CHAPTER = b"""<html xmlns="http://www.w3.org/1999/xhtml"><body><p><a href="ch1.xhtml#sec2">link</a></p><h2 id="sec2">Two</h2></body></html>"""


class TestDemoBook:
    @pytest.fixture
    def result(self, demo_epub, tmp_path):
        return convert_epub_to_mdbook(demo_epub, tmp_path / "out")

    def test_layout(self, result, tmp_path):
        book_dir = tmp_path / "out" / "demo"
        assert result.book_dir == book_dir
        assert (book_dir / "book.toml").is_file()
        assert (book_dir / "src" / "SUMMARY.md").is_file()
        assert (book_dir / "src" / "ch1.md").is_file()
        assert (book_dir / "src" / "text" / "ch2.md").is_file()

    def test_summary(self, result):
        summary = result.summary_path.read_text(encoding="utf-8")
        assert summary.startswith("# Demo\n\n")
        assert "- [Chapter 1](ch1.md)\n" in summary
        assert "  - [Chapter 2](text/ch2.md)\n" in summary

    def test_links_rewritten(self, result):
        ch1 = (result.book_dir / "src" / "ch1.md").read_text(encoding="utf-8")
        assert "(ch1.md#sec2)" in ch1
        assert "(text/ch2.md)" in ch1
        assert "(https://example.com/ch1.xhtml)" in ch1
        assert "(images/cover.jpg)" in ch1

        ch2 = (result.book_dir / "src" / "text" / "ch2.md").read_text(encoding="utf-8")
        assert "(../ch1.md)" in ch2

    def test_resources_copied_verbatim(self, result):
        assert (result.book_dir / "src" / "images" / "cover.jpg").read_bytes() == COVER_BYTES
        assert result.book_dir / "src" / "images" / "cover.jpg" in result.resources_copied

    def test_book_toml(self, result):
        toml = result.book_toml_path.read_text(encoding="utf-8")
        assert toml == '[book]\ntitle = "Demo"\nauthor = "Jane Doe"\n'
        assert result.title == "Demo"
        assert result.author == "Jane Doe"


def test_round_trip_single_chapter(make_epub, tmp_path):
    path = make_epub(
        [("ch1.xhtml", "application/xhtml+xml", CHAPTER)], name="single.epub", title="Demo"
    )
    result = convert_epub_to_mdbook(path, tmp_path / "out")

    assert "ch1.md#sec2" in (result.book_dir / "src" / "ch1.md").read_text(encoding="utf-8")
    assert result.summary_path.read_text(encoding="utf-8").startswith("# Demo")
    assert 'title = "Demo"' in result.book_toml_path.read_text(encoding="utf-8")
    assert "author" not in result.book_toml_path.read_text(encoding="utf-8")


def test_defaults_to_current_directory(demo_epub, tmp_path, monkeypatch):
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    convert_epub_to_mdbook(demo_epub)
    assert (workdir / "demo" / "book.toml").is_file()


def test_flat_output(demo_epub, tmp_path):
    out = tmp_path / "flat"
    result = convert_epub_to_mdbook(demo_epub, out, nested=False)
    assert result.book_dir == out
    assert (out / "book.toml").is_file()
    assert (out / "src" / "SUMMARY.md").is_file()
    assert not (out / "demo").exists()


def test_summary_collision(make_epub, tmp_path):
    path = make_epub(
        [
            ("SUMMARY.xhtml", "application/xhtml+xml", b"<html><body><p>Own summary</p></body></html>"),
            ("a.xhtml", "application/xhtml+xml", b'<html><body><a href="SUMMARY.xhtml">s</a></body></html>'),
        ],
        title="Clash",
    )
    result = convert_epub_to_mdbook(path, tmp_path / "out")
    src = result.book_dir / "src"

    assert "Own summary" in (src / "_SUMMARY.md").read_text(encoding="utf-8")
    assert (src / "SUMMARY.md").read_text(encoding="utf-8").startswith("# Clash")
    assert "[s](_SUMMARY.md)" in (src / "a.md").read_text(encoding="utf-8")


def test_title_defaults_to_book_name(make_epub, tmp_path):
    path = make_epub([], name="nameless.epub", title=None)
    result = convert_epub_to_mdbook(path, tmp_path / "out")
    assert result.title == "nameless"
    assert result.summary_path.read_text(encoding="utf-8").startswith("# nameless\n")


def test_not_a_file(tmp_path):
    with pytest.raises(NotAFileError):
        convert_epub_to_mdbook(tmp_path, tmp_path / "out")
    with pytest.raises(NotAFileError, match="is not a file"):
        convert_epub_to_mdbook(tmp_path / "missing.epub", tmp_path / "out")


def test_not_an_epub(tmp_path):
    path = tmp_path / "fake.epub"
    path.write_text("plain text", encoding="utf-8")
    with pytest.raises(EpubReadError):
        convert_epub_to_mdbook(path, tmp_path / "out")


def test_invalid_encoding(make_epub, tmp_path):
    path = make_epub(
        [("bad.xhtml", "application/xhtml+xml", b"<html><body><p>\xff\xfe\xfa</p></body></html>")]
    )
    with pytest.raises(InvalidEncodingError, match="bad.xhtml"):
        convert_epub_to_mdbook(path, tmp_path / "out")


def test_percent_encoded_chapter_links(make_epub, tmp_path):
    path = make_epub(
        [
            ("my chapter.xhtml", "application/xhtml+xml", b"<html><body><p>Spaced</p></body></html>"),
            ("d.xhtml", "application/xhtml+xml", b'<html><body><a href="my%20chapter.xhtml">x</a></body></html>'),
        ],
        name="spaced.epub",
    )
    result = convert_epub_to_mdbook(path, tmp_path / "out")
    src = result.book_dir / "src"

    assert (src / "my chapter.md").is_file()
    assert "[x](my%20chapter.md)" in (src / "d.md").read_text(encoding="utf-8")
