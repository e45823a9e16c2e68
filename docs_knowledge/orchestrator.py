"""Pipeline orchestration for knowledge acquisition runs."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional, Protocol

from .cargo import CargoDocBuilder, CargoMetadataResolver
from .config import KnowledgeConfig, load_config
from .crawl import PageCrawler, PageFetcher
from .logging import get_logger
from .models import Knowledge, RunSummary, SourceKind
from .service import ContentServer
from .writer import ArtifactWriter


class DocServer(Protocol):
    def start(self) -> str: ...

    def stop(self) -> None: ...


ServerFactory = Callable[[Path, KnowledgeConfig], DocServer]
WriterFactory = Callable[[KnowledgeConfig], ArtifactWriter]


def _default_server_factory(doc_tree: Path, config: KnowledgeConfig) -> DocServer:
    return ContentServer(
        doc_tree,
        host=config.server.host,
        port=config.server.port,
        startup_timeout=config.server.startup_timeout,
    )


def _default_writer_factory(config: KnowledgeConfig) -> ArtifactWriter:
    return ArtifactWriter(config.output_dir)


class Orchestrator:
    """Coordinates resolve, build, serve, crawl and write for one source tree."""

    def __init__(
        self,
        config: KnowledgeConfig | None = None,
        *,
        resolver: CargoMetadataResolver | None = None,
        builder: CargoDocBuilder | None = None,
        crawler: PageCrawler | None = None,
        server_factory: ServerFactory | None = None,
        writer_factory: WriterFactory | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._builder = builder
        self._crawler = crawler
        self._server_factory = server_factory or _default_server_factory
        self._writer_factory = writer_factory or _default_writer_factory
        self.logger = get_logger("orchestrator")
        self._handlers: Dict[SourceKind, Callable[[Knowledge, KnowledgeConfig], RunSummary]] = {
            SourceKind.CRATES_IO: self._fetch_crates_io,
        }

    def run(self, repo_path: Path | str, source_kind: str | SourceKind = SourceKind.CRATES_IO) -> str:
        """Run the pipeline and return the human-readable summary."""
        knowledge = Knowledge(
            repo_path=Path(repo_path),
            source_kind=SourceKind.parse(source_kind),
        )
        return self.fetch_all(knowledge).render()

    def fetch_all(self, knowledge: Knowledge) -> RunSummary:
        """Dispatch on the knowledge source kind and return the run summary."""
        handler = self._handlers.get(knowledge.source_kind)
        if handler is None:  # pragma: no cover - SourceKind is closed
            raise ValueError(f"Unsupported source type: {knowledge.source_kind}")
        config = self._resolve_config(knowledge.repo_path)
        self.logger.info(
            "Starting %s run for %s (version %s)",
            knowledge.source_kind.value,
            knowledge.repo_path,
            knowledge.version,
        )
        return handler(knowledge, config)

    def _fetch_crates_io(self, knowledge: Knowledge, config: KnowledgeConfig) -> RunSummary:
        resolver = self._resolver or CargoMetadataResolver(executable=config.cargo.executable)
        builder = self._builder or CargoDocBuilder(executable=config.cargo.executable)
        crawler = self._crawler or PageCrawler(
            PageFetcher(timeout=config.crawl.request_timeout),
            main_selector=config.crawl.main_selector,
        )

        packages = resolver.resolve(knowledge.repo_path)
        doc_tree = builder.build(knowledge.repo_path)

        writer = self._writer_factory(config)
        documented = crawler.documented_packages(doc_tree, packages)
        if not documented:
            self.logger.warning("No resolved package has documentation under %s", doc_tree)
            writer.summary.attempted = False
            return writer.summary

        server = self._server_factory(doc_tree, config)
        base_url = server.start()
        try:
            for artifact in crawler.crawl_packages(documented, base_url):
                try:
                    writer.write(artifact)
                except OSError as exc:
                    self.logger.error(
                        "Failed to write knowledge for %s: %s", artifact.package, exc
                    )
        finally:
            server.stop()
        return writer.summary

    def _resolve_config(self, repo_path: Path) -> KnowledgeConfig:
        if self._config is not None:
            return self._config
        try:
            root = repo_path.expanduser().resolve()
        except OSError:
            root = Path.cwd()
        if not root.is_dir():
            # Never pick up a neighbouring project's .knowledge.yml.
            return KnowledgeConfig(root=root)
        return load_config(root)


__all__ = ["DocServer", "Orchestrator"]
