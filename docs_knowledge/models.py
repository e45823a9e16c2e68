"""Core data models shared across knowledge pipeline components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

PACKAGE_SEPARATOR = "-"
DOC_DIR_SEPARATOR = "_"
ARTIFACT_SUFFIX = "_knowledge.md"


def normalize_package_name(name: str) -> str:
    """Map a manifest package name onto the directory name rustdoc emits."""
    return name.replace(PACKAGE_SEPARATOR, DOC_DIR_SEPARATOR)


def artifact_filename(package: str) -> str:
    return f"{package}{ARTIFACT_SUFFIX}"


class SourceKind(Enum):
    """Supported documentation sources."""

    CRATES_IO = "cratesio"

    @classmethod
    def parse(cls, value: "str | SourceKind") -> "SourceKind":
        if isinstance(value, SourceKind):
            return value
        for kind in cls:
            if kind.value == value.strip().lower():
                return kind
        raise ValueError(f"Unsupported source type: {value}")


@dataclass(frozen=True)
class Knowledge:
    """A request to turn one source tree into knowledge artifacts."""

    repo_path: Path
    source_kind: SourceKind = SourceKind.CRATES_IO
    version: str = "latest"


@dataclass(frozen=True)
class CrawlTarget:
    """One page of a package to fetch, relative to the package directory."""

    package: str
    path: str


@dataclass(frozen=True)
class ConvertedPage:
    """Markdown produced from a single crawled page."""

    target: CrawlTarget
    markdown: str


@dataclass
class PackageArtifact:
    """Accumulated pages for one package, in link discovery order."""

    package: str
    pages: List[ConvertedPage] = field(default_factory=list)

    def add(self, page: ConvertedPage) -> None:
        self.pages.append(page)

    @property
    def filename(self) -> str:
        return artifact_filename(self.package)

    @property
    def text(self) -> str:
        return "".join(f"{page.markdown}\n\n" for page in self.pages)


@dataclass
class RunSummary:
    """Ordered record of the artifacts written during one run."""

    paths: List[Path] = field(default_factory=list)
    output_dir: Optional[Path] = None
    attempted: bool = True

    def record(self, path: Path) -> None:
        self.paths.append(path)

    def render(self) -> str:
        if not self.attempted:
            return "No packages were processed."
        if not self.paths:
            return "No Markdown files were created."
        location = f" in `{self.output_dir}`" if self.output_dir is not None else ""
        lines = [f"Created the following Markdown files{location}:", ""]
        lines.extend(f"- {path}" for path in self.paths)
        return "\n".join(lines) + "\n"
