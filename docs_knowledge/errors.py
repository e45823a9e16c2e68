"""Error taxonomy for the knowledge pipeline."""

from __future__ import annotations

from pathlib import Path


class KnowledgeError(RuntimeError):
    """Base class for pipeline failures."""


class ResolutionError(KnowledgeError):
    """Raised when the package manifest graph cannot be read or parsed."""


class BuildError(KnowledgeError):
    """Raised when documentation generation does not produce a doc tree."""


class GeneratorFailed(BuildError):
    """The documentation generator could not run or exited non-zero."""

    def __init__(self, message: str, *, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class OutputMissing(BuildError):
    """The generator succeeded but its output directory does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Documentation directory not found: {path}")
        self.path = path


class ServerStartError(KnowledgeError):
    """Raised when the content server does not become ready."""


class FetchError(KnowledgeError):
    """Raised when a page cannot be fetched from the content server."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


__all__ = [
    "BuildError",
    "FetchError",
    "GeneratorFailed",
    "KnowledgeError",
    "OutputMissing",
    "ResolutionError",
    "ServerStartError",
]
