"""Page content extraction and markdown conversion."""

from .extract import MAIN_CONTENT_SELECTOR, extract_links, extract_main_content
from .markdown import convert_to_markdown

__all__ = [
    "MAIN_CONTENT_SELECTOR",
    "convert_to_markdown",
    "extract_links",
    "extract_main_content",
]
