"""Process chapter HTML into Markdown."""

import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from markdownify import markdownify as md

# EPUB chapters are XHTML; parsing them with the HTML parser is intended
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)


class ContentProcessor:
    """Convert chapter HTML into mdBook-friendly Markdown."""

    def __init__(self, heading_style: str = "ATX", bullets: str = "-"):
        self.heading_style = heading_style
        self.bullets = bullets

    def to_markdown(self, html_content: str) -> str:
        """Convert an XHTML document to Markdown, keeping links and images."""
        soup = BeautifulSoup(html_content, "lxml")

        for tag in soup(["script", "style"]):
            tag.decompose()

        body = soup.body or soup
        markdown = md(
            str(body),
            heading_style=self.heading_style,
            bullets=self.bullets,
            autolinks=False,
        )
        return self._clean_whitespace(markdown)

    def _clean_whitespace(self, markdown: str) -> str:
        """Strip trailing spaces and collapse runs of blank lines."""
        lines = [line.rstrip() for line in markdown.split("\n")]
        cleaned = []
        prev_blank = False
        for line in lines:
            is_blank = not line.strip()
            if is_blank and prev_blank:
                continue
            cleaned.append(line)
            prev_blank = is_blank

        text = "\n".join(cleaned).strip()
        return f"{text}\n" if text else ""
