"""Isolate the main content region of a rustdoc page."""

from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup

MAIN_CONTENT_SELECTOR = "#main-content"


def extract_main_content(html: str, selector: str = MAIN_CONTENT_SELECTOR) -> str:
    """Return the inner HTML of the first element matching ``selector``.

    An empty string means the page has nothing to convert.
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    element = soup.select_one(selector)
    if element is None:
        return ""
    return element.decode_contents()


def extract_links(html: str) -> List[str]:
    """Return every anchor ``href`` in document order, duplicates included."""
    soup = BeautifulSoup(html or "", "html.parser")
    links: List[str] = []
    for anchor in soup.find_all("a"):
        href = anchor.get("href")
        if isinstance(href, str):
            links.append(href)
    return links


__all__ = ["MAIN_CONTENT_SELECTOR", "extract_links", "extract_main_content"]
