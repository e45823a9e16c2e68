"""Tests for the background content server."""

from __future__ import annotations

import socket
from pathlib import Path

import pytest

from docs_knowledge.crawl import PageFetcher
from docs_knowledge.errors import FetchError, ServerStartError
from docs_knowledge.service import ContentServer


def _doc_root(tmp_path: Path) -> Path:
    root = tmp_path / "doc"
    (root / "alpha").mkdir(parents=True)
    (root / "alpha" / "all.html").write_text("<p>index</p>", encoding="utf-8")
    return root


def test_server_accepts_requests_as_soon_as_start_returns(tmp_path: Path) -> None:
    server = ContentServer(_doc_root(tmp_path), port=0)
    base_url = server.start()
    try:
        assert server.running
        assert server.port != 0
        assert base_url == f"http://127.0.0.1:{server.port}"
        body = PageFetcher(timeout=5).fetch(f"{base_url}/alpha/all.html")
        assert body == "<p>index</p>"
    finally:
        server.stop()

    assert not server.running


def test_server_404_surfaces_as_fetch_error(tmp_path: Path) -> None:
    with ContentServer(_doc_root(tmp_path), port=0) as server:
        with pytest.raises(FetchError, match="HTTP 404"):
            PageFetcher(timeout=5).fetch(f"{server.base_url}/alpha/missing.html")


def test_server_start_fails_when_port_is_taken(tmp_path: Path) -> None:
    blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    blocker.bind(("127.0.0.1", 0))
    blocker.listen(1)
    port = blocker.getsockname()[1]
    try:
        server = ContentServer(_doc_root(tmp_path), port=port)
        with pytest.raises(ServerStartError):
            server.start()
    finally:
        blocker.close()


def test_server_that_was_never_started_is_not_ready(tmp_path: Path) -> None:
    server = ContentServer(_doc_root(tmp_path), port=0)

    assert server._wait_ready() is False
    assert not server.running
