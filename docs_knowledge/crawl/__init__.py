"""Crawling of served documentation pages."""

from .crawler import INDEX_PAGE, PageCrawler
from .fetcher import Fetcher, PageFetcher

__all__ = ["Fetcher", "INDEX_PAGE", "PageCrawler", "PageFetcher"]
