"""Tests for the package crawler."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pytest

from docs_knowledge.crawl import PageCrawler
from docs_knowledge.errors import FetchError
from tests._fixtures.doc_tree import index_page, page

BASE = "http://docs.test"


class FakeFetcher:
    """Serves canned pages by URL and records every request."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.requested: List[str] = []

    def __call__(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "HTTP 404")
        return self.pages[url]


def _doc_tree(tmp_path: Path, *names: str) -> Path:
    root = tmp_path / "doc"
    for name in names:
        (root / name).mkdir(parents=True)
    (root / "search-index.js").write_text("", encoding="utf-8")
    return root


def test_crawl_skips_directories_outside_resolved_packages(tmp_path: Path) -> None:
    doc_tree = _doc_tree(tmp_path, "alpha", "extra_tool", "static.files")
    fetcher = FakeFetcher({f"{BASE}/alpha/all.html": index_page([])})
    crawler = PageCrawler(fetcher)

    artifacts = list(crawler.crawl(doc_tree, {"alpha", "not_built"}, BASE))

    assert [artifact.package for artifact in artifacts] == ["alpha"]
    assert fetcher.requested == [f"{BASE}/alpha/all.html"]


def test_crawl_visits_packages_in_sorted_order(tmp_path: Path) -> None:
    doc_tree = _doc_tree(tmp_path, "zeta", "alpha", "mid")
    fetcher = FakeFetcher(
        {f"{BASE}/{name}/all.html": index_page([]) for name in ("zeta", "alpha", "mid")}
    )

    artifacts = list(PageCrawler(fetcher).crawl(doc_tree, {"zeta", "alpha", "mid"}, BASE))

    assert [artifact.package for artifact in artifacts] == ["alpha", "mid", "zeta"]


def test_pages_follow_link_order_and_duplicates_are_refetched(tmp_path: Path) -> None:
    doc_tree = _doc_tree(tmp_path, "alpha")
    fetcher = FakeFetcher(
        {
            f"{BASE}/alpha/all.html": index_page(["struct.B.html", "fn.a.html", "struct.B.html"]),
            f"{BASE}/alpha/struct.B.html": page("<h1>Struct B</h1>"),
            f"{BASE}/alpha/fn.a.html": page("<h1>Function a</h1>"),
        }
    )

    [artifact] = PageCrawler(fetcher).crawl(doc_tree, {"alpha"}, BASE)

    assert [converted.target.path for converted in artifact.pages] == [
        "struct.B.html",
        "fn.a.html",
        "struct.B.html",
    ]
    assert fetcher.requested.count(f"{BASE}/alpha/struct.B.html") == 2
    assert artifact.pages[0].markdown == "# Struct B"


def test_failed_page_fetch_is_logged_and_skipped(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    doc_tree = _doc_tree(tmp_path, "alpha")
    fetcher = FakeFetcher(
        {
            f"{BASE}/alpha/all.html": index_page(["fn.a.html", "fn.gone.html", "fn.c.html"]),
            f"{BASE}/alpha/fn.a.html": page("<p>a</p>"),
            f"{BASE}/alpha/fn.c.html": page("<p>c</p>"),
        }
    )

    with caplog.at_level(logging.WARNING, logger="docs_knowledge"):
        [artifact] = PageCrawler(fetcher).crawl(doc_tree, {"alpha"}, BASE)

    assert [converted.markdown for converted in artifact.pages] == ["a", "c"]
    assert any("fn.gone.html" in record.getMessage() for record in caplog.records)


def test_failed_index_fetch_skips_package_only(tmp_path: Path) -> None:
    doc_tree = _doc_tree(tmp_path, "alpha", "beta")
    fetcher = FakeFetcher({f"{BASE}/beta/all.html": index_page([])})

    artifacts = list(PageCrawler(fetcher).crawl(doc_tree, {"alpha", "beta"}, BASE))

    assert [artifact.package for artifact in artifacts] == ["beta"]


def test_pages_without_main_content_contribute_nothing(tmp_path: Path) -> None:
    doc_tree = _doc_tree(tmp_path, "alpha")
    fetcher = FakeFetcher(
        {
            f"{BASE}/alpha/all.html": index_page(["plain.html", "fn.a.html"]),
            f"{BASE}/alpha/plain.html": "<html><body><p>no marker</p></body></html>",
            f"{BASE}/alpha/fn.a.html": page("<p>a</p>"),
        }
    )

    [artifact] = PageCrawler(fetcher).crawl(doc_tree, {"alpha"}, BASE)

    assert [converted.target.path for converted in artifact.pages] == ["fn.a.html"]


def test_index_targets_are_bound_to_package() -> None:
    targets = PageCrawler.index_targets("alpha", index_page(["a.html", "b.html"]))

    assert [(target.package, target.path) for target in targets] == [
        ("alpha", "a.html"),
        ("alpha", "b.html"),
    ]


def test_page_links_are_percent_encoded(tmp_path: Path) -> None:
    doc_tree = _doc_tree(tmp_path, "alpha")
    fetcher = FakeFetcher(
        {
            f"{BASE}/alpha/all.html": index_page(["fn.名前.html", "fn a.html", "fn.b%20c.html"]),
            f"{BASE}/alpha/fn.%E5%90%8D%E5%89%8D.html": page("<h1>Function 名前</h1>"),
        }
    )

    [artifact] = PageCrawler(fetcher).crawl(doc_tree, {"alpha"}, BASE)

    assert fetcher.requested[1:] == [
        f"{BASE}/alpha/fn.%E5%90%8D%E5%89%8D.html",
        f"{BASE}/alpha/fn%20a.html",
        f"{BASE}/alpha/fn.b%20c.html",
    ]
    assert [converted.markdown for converted in artifact.pages] == ["# Function 名前"]


def test_crawl_packages_uses_the_given_list(tmp_path: Path) -> None:
    fetcher = FakeFetcher(
        {f"{BASE}/{name}/all.html": index_page([]) for name in ("beta", "alpha")}
    )

    artifacts = list(PageCrawler(fetcher).crawl_packages(["beta", "alpha"], BASE))

    assert [artifact.package for artifact in artifacts] == ["beta", "alpha"]
