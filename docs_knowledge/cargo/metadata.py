"""Resolve documentable packages from ``cargo metadata``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Set

from ..errors import ResolutionError
from ..logging import get_logger
from ..models import normalize_package_name
from .command import CommandRunner, run_command


class CargoMetadataResolver:
    """Lists every package in a workspace's dependency graph, normalised for rustdoc."""

    def __init__(
        self,
        *,
        executable: str = "cargo",
        runner: CommandRunner | None = None,
    ) -> None:
        self.executable = executable
        self._runner = runner or run_command
        self.logger = get_logger("cargo.metadata")

    def resolve(self, repo_path: Path | str) -> Set[str]:
        """Return the normalised package identifiers declared by ``repo_path``."""
        repo = Path(repo_path).expanduser()
        manifest = repo / "Cargo.toml"
        if not manifest.is_file():
            raise ResolutionError(f"No Cargo.toml found at {manifest}")

        args = [
            self.executable,
            "metadata",
            "--format-version",
            "1",
            "--manifest-path",
            str(manifest),
        ]
        try:
            result = self._runner(args, cwd=repo, capture_output=True)
        except OSError as exc:
            raise ResolutionError(f"Unable to run '{self.executable} metadata': {exc}") from exc

        if not result.ok:
            detail = result.stderr.strip() or f"exit code {result.returncode}"
            raise ResolutionError(f"'{self.executable} metadata' failed: {detail}")

        names = self._package_names(result.stdout)
        packages = {normalize_package_name(name) for name in names}
        self.logger.info("Detected %d packages", len(packages))
        for name in sorted(packages):
            self.logger.debug("- %s", name)
        return packages

    @staticmethod
    def _package_names(raw: str) -> List[str]:
        try:
            payload: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ResolutionError(f"cargo metadata returned invalid JSON: {exc}") from exc

        packages = payload.get("packages") if isinstance(payload, dict) else None
        if not isinstance(packages, list):
            raise ResolutionError("cargo metadata output has no 'packages' list")

        return list(_iter_names(packages))


def _iter_names(packages: Iterable[Any]) -> Iterable[str]:
    for package in packages:
        if not isinstance(package, dict):
            raise ResolutionError("cargo metadata package entry is not an object")
        name = package.get("name")
        if not isinstance(name, str) or not name:
            raise ResolutionError("cargo metadata package entry has no name")
        yield name


__all__ = ["CargoMetadataResolver"]
