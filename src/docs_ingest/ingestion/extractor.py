"""Markup → plain-text extraction applied to every file the walker reads."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod

import markdown
from bs4 import BeautifulSoup

__all__ = ["MarkupTextExtractor", "TextExtractor", "extract_text"]

_WHITESPACE = re.compile(r"\s+")


class TextExtractor(ABC):
    """Turns the raw bytes of one file into its visible text."""

    @abstractmethod
    def extract_text(self, raw: bytes) -> str:
        """Return the plain-text content of *raw* with all markup removed."""
        ...


class MarkupTextExtractor(TextExtractor):
    """Extract text from Markdown / HTML sources.

    Markdown syntax is first rendered to HTML so that headings, emphasis,
    list bullets and the like become tags; BeautifulSoup then drops every
    tag and the remaining text nodes are joined with single spaces.  Tags
    that were escaped inside code spans are stripped by further passes.
    Input that is not markup at all comes out with its whitespace collapsed.

    Parameters
    ----------
    render_markdown:
        Render Markdown before stripping tags.  Disable for pure HTML trees
        where literal ``#`` or ``*`` characters must survive.
    encoding:
        Encoding used to decode the file bytes.  Undecodable sequences are
        replaced rather than raising.
    """

    def __init__(self, *, render_markdown: bool = True, encoding: str = "utf-8") -> None:
        self.render_markdown = render_markdown
        self.encoding = encoding

    def extract_text(self, raw: bytes) -> str:
        source = raw.decode(self.encoding, errors="replace")
        html = markdown.markdown(source) if self.render_markdown else source
        text = _strip_tags(html)
        # Markdown code spans and code blocks escape their raw HTML, so the
        # first pass can surface literal tags; strip until nothing changes.
        while True:
            stripped = _strip_tags(text)
            if stripped == text:
                return text
            text = stripped


def _strip_tags(html: str) -> str:
    text = BeautifulSoup(html, "html.parser").get_text(separator=" ", strip=True)
    return _WHITESPACE.sub(" ", text).strip()


_default_extractor = MarkupTextExtractor()


def extract_text(raw: bytes) -> str:
    """Extract text from *raw* with the default :class:`MarkupTextExtractor`."""
    return _default_extractor.extract_text(raw)
