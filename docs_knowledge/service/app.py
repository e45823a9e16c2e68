"""FastAPI application serving a generated documentation tree."""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, Response

_HTML_SUFFIXES = {".html", ".htm"}


def resolve_request_path(doc_root: Path, request_path: str) -> Path | None:
    """Map a URL path onto ``doc_root``; ``None`` when it escapes the root."""
    root = doc_root.resolve()
    candidate = (root / request_path.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    return candidate


def create_app(doc_root: Path | str) -> FastAPI:
    """Create an app answering GET requests from files under ``doc_root``."""
    root = Path(doc_root).resolve()
    app = FastAPI(title="Docs Knowledge Content Server", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.doc_root = root

    @app.get("/{requested:path}")
    async def serve(requested: str) -> Response:
        full_path = resolve_request_path(root, requested)
        if full_path is None or not full_path.exists():
            return PlainTextResponse("404 Not Found", status_code=404)
        try:
            content = full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return PlainTextResponse("500 Internal Server Error", status_code=500)
        media_type = "text/html" if full_path.suffix in _HTML_SUFFIXES else "text/plain"
        return Response(content=content, media_type=media_type)

    return app


__all__ = ["create_app", "resolve_request_path"]
