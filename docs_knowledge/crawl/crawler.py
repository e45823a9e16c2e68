"""Crawl each package's rustdoc index and convert its pages."""

from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Callable, Iterable, Iterator, List, Optional
from urllib.parse import quote

from ..convert import MAIN_CONTENT_SELECTOR, convert_to_markdown, extract_links, extract_main_content
from ..errors import FetchError
from ..logging import get_logger
from ..models import ConvertedPage, CrawlTarget, PackageArtifact
from .fetcher import Fetcher, PageFetcher

INDEX_PAGE = "all.html"


class PageCrawler:
    """Best-effort crawler: failed fetches are logged and skipped."""

    def __init__(
        self,
        fetcher: Optional[Fetcher] = None,
        *,
        main_selector: str = MAIN_CONTENT_SELECTOR,
        converter: Callable[[str], str] = convert_to_markdown,
    ) -> None:
        self._fetch = fetcher or PageFetcher()
        self.main_selector = main_selector
        self._convert = converter
        self.logger = get_logger("crawl")

    def crawl(
        self,
        doc_tree: Path,
        packages: AbstractSet[str],
        base_url: str,
    ) -> Iterator[PackageArtifact]:
        """Yield one artifact per package that is both resolved and present in ``doc_tree``.

        Packages are visited in sorted directory-name order. A package whose
        index page cannot be fetched yields nothing.
        """
        return self.crawl_packages(self.documented_packages(doc_tree, packages), base_url)

    def crawl_packages(self, packages: Iterable[str], base_url: str) -> Iterator[PackageArtifact]:
        """Yield artifacts for packages already known to be documented, in the given order."""
        for package in packages:
            artifact = self.crawl_package(package, base_url)
            if artifact is not None:
                yield artifact

    def documented_packages(self, doc_tree: Path, packages: AbstractSet[str]) -> List[str]:
        selected: List[str] = []
        for entry in sorted(doc_tree.iterdir(), key=lambda path: path.name):
            if not entry.is_dir():
                continue
            if entry.name in packages:
                selected.append(entry.name)
            else:
                self.logger.debug("Skipping non-package directory: %s", entry.name)
        return selected

    def crawl_package(self, package: str, base_url: str) -> Optional[PackageArtifact]:
        self.logger.info("Processing package: %s", package)
        index_url = _join_url(base_url, package, INDEX_PAGE)
        try:
            index_html = self._fetch(index_url)
        except FetchError as exc:
            self.logger.warning("Skipping package %s: %s", package, exc)
            return None

        artifact = PackageArtifact(package=package)
        for target in self.index_targets(package, index_html):
            page = self.crawl_page(target, base_url)
            if page is not None:
                artifact.add(page)
        self.logger.debug("Converted %d pages for %s", len(artifact.pages), package)
        return artifact

    def crawl_page(self, target: CrawlTarget, base_url: str) -> Optional[ConvertedPage]:
        url = _join_url(base_url, target.package, target.path)
        self.logger.debug("Fetching page: %s", url)
        try:
            html = self._fetch(url)
        except FetchError as exc:
            self.logger.warning("%s", exc)
            return None

        content = extract_main_content(html, self.main_selector)
        if not content:
            return None
        return ConvertedPage(target=target, markdown=self._convert(content))

    @staticmethod
    def index_targets(package: str, index_html: str) -> List[CrawlTarget]:
        return [CrawlTarget(package=package, path=href) for href in extract_links(index_html)]


def _join_url(base_url: str, package: str, path: str) -> str:
    # Already-escaped hrefs keep their percent sequences.
    return f"{base_url.rstrip('/')}/{quote(package)}/{quote(path, safe='/#?=&%')}"


__all__ = ["INDEX_PAGE", "PageCrawler"]
