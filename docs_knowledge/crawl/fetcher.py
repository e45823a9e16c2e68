"""HTTP page fetching for the crawler."""

from __future__ import annotations

import socket
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import FetchError

Fetcher = Callable[[str], str]


class PageFetcher:
    """Fetches page bodies as text, raising ``FetchError`` on any failure."""

    DEFAULT_TIMEOUT = 30.0

    def __init__(self, *, timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        self.timeout = timeout

    def __call__(self, url: str) -> str:
        return self.fetch(url)

    def fetch(self, url: str) -> str:
        request = Request(url, headers={"Accept": "text/html"}, method="GET")
        try:
            with urlopen(request, timeout=self.timeout) as response:  # type: ignore[arg-type]
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise FetchError(url, f"HTTP {status}")
                raw = response.read()
                charset = response.headers.get_content_charset() or "utf-8"
        except HTTPError as exc:
            raise FetchError(url, f"HTTP {exc.code}") from exc
        except URLError as exc:
            raise FetchError(url, str(exc.reason)) from exc
        except (socket.timeout, TimeoutError) as exc:
            raise FetchError(url, "timed out") from exc
        except OSError as exc:
            raise FetchError(url, str(exc)) from exc
        except ValueError as exc:
            # http.client rejects URLs with spaces or non-ASCII characters.
            raise FetchError(url, f"invalid URL: {exc}") from exc

        try:
            return raw.decode(charset)
        except (LookupError, UnicodeDecodeError) as exc:
            raise FetchError(url, f"undecodable body: {exc}") from exc


__all__ = ["Fetcher", "PageFetcher"]
