"""Configuration loading for docs-knowledge (.knowledge.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".knowledge.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ServerConfig:
    """Where the transient content server listens."""

    host: str = "127.0.0.1"
    port: int = 8000
    startup_timeout: float = 10.0


@dataclass
class CrawlConfig:
    """Per-request crawl behaviour."""

    request_timeout: float = 30.0
    main_selector: str = "#main-content"


@dataclass
class CargoConfig:
    """Documentation generator settings."""

    executable: str = "cargo"


@dataclass
class KnowledgeConfig:
    """Represents the settings defined in .knowledge.yml."""

    root: Path
    server: ServerConfig = field(default_factory=ServerConfig)
    crawl: CrawlConfig = field(default_factory=CrawlConfig)
    cargo: CargoConfig = field(default_factory=CargoConfig)
    output_dir: Path = field(default_factory=lambda: Path(".knowledgebase"))


def load_config(config_path: Path) -> KnowledgeConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return KnowledgeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = KnowledgeConfig(root=root)

    server_data = _as_dict(data.get("server"))
    if server_data:
        config.server = ServerConfig(
            host=_as_str(server_data.get("host")) or ServerConfig.host,
            port=_as_int(server_data.get("port"), ServerConfig.port),
            startup_timeout=_as_float(
                server_data.get("startup_timeout"), ServerConfig.startup_timeout
            ),
        )

    crawl_data = _as_dict(data.get("crawl"))
    if crawl_data:
        config.crawl = CrawlConfig(
            request_timeout=_as_float(
                crawl_data.get("request_timeout"), CrawlConfig.request_timeout
            ),
            main_selector=_as_str(crawl_data.get("main_selector")) or CrawlConfig.main_selector,
        )

    cargo_data = _as_dict(data.get("cargo"))
    if cargo_data:
        config.cargo = CargoConfig(
            executable=_as_str(cargo_data.get("executable")) or CargoConfig.executable
        )

    output_data = _as_dict(data.get("output"))
    directory = _as_str(output_data.get("directory")) if output_data else None
    if directory:
        config.output_dir = Path(directory).expanduser()

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return default
    return default


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return default
    return default


__all__ = [
    "CargoConfig",
    "ConfigError",
    "CrawlConfig",
    "KnowledgeConfig",
    "ServerConfig",
    "load_config",
]
