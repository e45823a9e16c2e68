"""Write package artifacts and track the run summary."""

from __future__ import annotations

from pathlib import Path

from .logging import get_logger
from .models import PackageArtifact, RunSummary

DEFAULT_OUTPUT_DIR = Path(".knowledgebase")


class ArtifactWriter:
    """Writes one markdown file per package, truncating any previous run's file."""

    def __init__(self, output_dir: Path | str = DEFAULT_OUTPUT_DIR) -> None:
        self.output_dir = Path(output_dir)
        self.summary = RunSummary(output_dir=self.output_dir)
        self.logger = get_logger("writer")

    def write(self, artifact: PackageArtifact) -> Path:
        """Write ``artifact`` and record it; ``OSError`` propagates to the caller."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / artifact.filename
        file_path.write_text(artifact.text, encoding="utf-8")
        self.summary.record(file_path)
        self.logger.info("Markdown written to file: %s", file_path)
        return file_path


__all__ = ["ArtifactWriter", "DEFAULT_OUTPUT_DIR"]
