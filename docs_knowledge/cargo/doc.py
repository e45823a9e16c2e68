"""Generate rustdoc output with ``cargo doc``."""

from __future__ import annotations

from pathlib import Path

from ..errors import GeneratorFailed, OutputMissing
from ..logging import get_logger
from .command import CommandRunner, run_command

DOC_OUTPUT = Path("target") / "doc"


class CargoDocBuilder:
    """Builds dependency-free, private-item-inclusive docs for a workspace."""

    FLAGS = ("--no-deps", "--document-private-items")

    def __init__(
        self,
        *,
        executable: str = "cargo",
        runner: CommandRunner | None = None,
    ) -> None:
        self.executable = executable
        self._runner = runner or run_command
        self.logger = get_logger("cargo.doc")

    def build(self, repo_path: Path | str) -> Path:
        """Run the generator synchronously and return the resulting doc tree."""
        resolved = self._canonicalize(repo_path)
        args = [self.executable, "doc", *self.FLAGS]
        self.logger.info("Generating documentation in %s", resolved)

        try:
            result = self._runner(args, cwd=resolved)
        except OSError as exc:
            raise GeneratorFailed(
                f"Unable to run '{self.executable} doc': {exc}"
            ) from exc

        if not result.ok:
            raise GeneratorFailed(
                f"Failed to generate documentation with `{self.executable} doc` "
                f"(exit code {result.returncode}).",
                returncode=result.returncode,
            )

        doc_tree = resolved / DOC_OUTPUT
        if not doc_tree.is_dir():
            raise OutputMissing(doc_tree)
        self.logger.debug("Documentation tree at %s", doc_tree)
        return doc_tree

    def _canonicalize(self, repo_path: Path | str) -> Path:
        try:
            return Path(repo_path).expanduser().resolve(strict=True)
        except (OSError, RuntimeError):
            fallback = Path.cwd()
            self.logger.warning(
                "Failed to resolve path: %s; using %s", repo_path, fallback
            )
            return fallback


__all__ = ["CargoDocBuilder", "DOC_OUTPUT"]
