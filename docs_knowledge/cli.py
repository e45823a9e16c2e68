"""CLI entrypoints for docs-knowledge commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .errors import KnowledgeError
from .logging import configure_logging
from .models import SourceKind
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docs-knowledge",
        description="Turn generated API documentation into per-package markdown knowledge files.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch_parser = subparsers.add_parser(
        "fetch",
        help="Fetch and generate knowledge for the packages of a repository.",
    )
    _add_verbose_option(fetch_parser, suppress_default=True)
    fetch_parser.add_argument(
        "-r",
        "--repo-path",
        default=".",
        help="Path to the local repository (defaults to current directory).",
    )
    fetch_parser.add_argument(
        "-t",
        "--source-type",
        default=SourceKind.CRATES_IO.value,
        choices=[kind.value for kind in SourceKind],
        help="Documentation source type.",
    )

    list_parser = subparsers.add_parser("list", help="List the available sources.")
    _add_verbose_option(list_parser, suppress_default=True)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve a generated documentation tree in the foreground.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("doc_root", help="Documentation directory to serve.")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docs-knowledge commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "fetch":
        orchestrator = Orchestrator()
        try:
            summary = orchestrator.run(args.repo_path, args.source_type)
        except (KnowledgeError, ConfigError) as exc:
            parser.exit(1, f"docs-knowledge fetch failed: {exc}\n")
        print(summary)
    elif args.command == "list":
        print("Available sources:")
        for kind in SourceKind:
            print(f"- {kind.value}")
    elif args.command == "serve":
        _serve(parser, Path(args.doc_root), host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _serve(parser: argparse.ArgumentParser, doc_root: Path, *, host: str, port: int) -> None:  # pragma: no cover - blocking
    if not doc_root.is_dir():
        parser.exit(1, f"Documentation directory not found: {doc_root}\n")

    import uvicorn

    from .service import create_app

    uvicorn.run(create_app(doc_root), host=host, port=port)


if __name__ == "__main__":
    main(sys.argv[1:])
