"""Background uvicorn server for the content app."""

from __future__ import annotations

import socket
import threading
from pathlib import Path
from typing import Optional

import uvicorn

from ..errors import ServerStartError
from ..logging import get_logger
from .app import create_app


class _NotifyingServer(uvicorn.Server):
    """uvicorn server that reports when startup has completed."""

    def __init__(self, config: uvicorn.Config, ready: threading.Event) -> None:
        super().__init__(config)
        self._ready = ready

    async def startup(self, sockets: Optional[list[socket.socket]] = None) -> None:
        await super().startup(sockets=sockets)
        if not self.should_exit:
            self._ready.set()


class ContentServer:
    """Serves a doc tree over HTTP on a daemon thread.

    The listening socket is bound on the calling thread, so connections made
    after ``start()`` returns are queued even before the event loop accepts
    them; ``start()`` additionally blocks until uvicorn reports startup.
    """

    def __init__(
        self,
        doc_root: Path | str,
        *,
        host: str = "127.0.0.1",
        port: int = 8000,
        startup_timeout: float = 10.0,
    ) -> None:
        self.doc_root = Path(doc_root)
        self.host = host
        self.port = port
        self.startup_timeout = startup_timeout
        self.logger = get_logger("service.server")
        self._ready = threading.Event()
        self._socket: Optional[socket.socket] = None
        self._server: Optional[_NotifyingServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and self._ready.is_set()

    def start(self) -> str:
        """Bind, spawn the worker thread and wait for readiness; return the base URL."""
        if self._thread is not None:
            return self.base_url

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.host, self.port))
            sock.listen(128)
        except OSError as exc:
            sock.close()
            raise ServerStartError(
                f"Unable to bind content server to {self.host}:{self.port}: {exc}"
            ) from exc
        self._socket = sock
        self.port = sock.getsockname()[1]

        config = uvicorn.Config(
            create_app(self.doc_root),
            lifespan="off",
            log_config=None,
            access_log=False,
        )
        self._server = _NotifyingServer(config, self._ready)
        self._thread = threading.Thread(
            target=self._server.run,
            kwargs={"sockets": [sock]},
            name="docs-knowledge-content-server",
            daemon=True,
        )
        self._thread.start()

        if not self._wait_ready():
            self.stop()
            raise ServerStartError(
                f"Content server did not become ready within {self.startup_timeout}s"
            )
        self.logger.info("Serving %s at %s", self.doc_root, self.base_url)
        return self.base_url

    def stop(self) -> None:
        """Ask the server to exit and release the socket."""
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=self.startup_timeout)
        if self._socket is not None:
            self._socket.close()
        self._socket = None
        self._server = None
        self._thread = None
        self._ready.clear()

    def _wait_ready(self) -> bool:
        if self._thread is None:
            return False
        remaining = self.startup_timeout
        interval = 0.05
        while remaining > 0:
            if self._ready.wait(timeout=min(interval, remaining)):
                return True
            if not self._thread.is_alive():
                return False
            remaining -= interval
        return self._ready.is_set()

    def __enter__(self) -> "ContentServer":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


__all__ = ["ContentServer"]
