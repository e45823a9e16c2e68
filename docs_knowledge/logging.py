"""Logging utilities for docs-knowledge runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "docs_knowledge"
# uvicorn logs startup failures here; its access log stays disabled.
_SERVER_LOGGER_NAME = "uvicorn.error"

_CONSOLE_FORMAT = "[docs-knowledge] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(threadName)s]: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docs_knowledge hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send package and content-server records to the console and an optional file.

    Fetched page URLs are logged at DEBUG, so ``verbose`` shows crawl progress
    page by page; skipped fetches are WARNING and always visible.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    handlers.append(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logger = _attach(logging.getLogger(_LOGGER_NAME), handlers, level)
    _attach(
        logging.getLogger(_SERVER_LOGGER_NAME),
        handlers,
        logging.INFO if verbose else logging.WARNING,
    )
    return logger


def _attach(logger: logging.Logger, handlers: list[logging.Handler], level: int) -> logging.Logger:
    logger.setLevel(level)
    logger.propagate = False
    # Repeated CLI invocations in one process must not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "get_logger"]
