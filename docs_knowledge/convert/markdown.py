"""HTML fragment to markdown conversion."""

from __future__ import annotations

from bs4 import BeautifulSoup
from markdownify import markdownify as md_convert

_DISCARDED_TAGS = ["script", "style", "noscript"]


def convert_to_markdown(html: str) -> str:
    """Convert an HTML fragment into ATX-style markdown.

    Scripting and styling elements are dropped together with their contents.
    """
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_DISCARDED_TAGS):
        tag.decompose()
    markdown = md_convert(str(soup), heading_style="ATX", bullets="-")
    return markdown.strip()


__all__ = ["convert_to_markdown"]
