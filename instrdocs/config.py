"""Configuration loading for instrdocs (.instrdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

CONFIG_FILENAME = ".instrdocs.yml"

DEFAULT_CONTAINER = "instrumentation"
DEFAULT_SOURCE_ID = "opentelemetry-java-instrumentation"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """Where and how the module tree is scanned."""

    root: Optional[Path] = None
    container: str = DEFAULT_CONTAINER
    workers: int = 1
    experimental_config: Optional[Path] = None


@dataclass
class TargetConfig:
    """One document that receives a generated block."""

    path: str
    component: str
    renderer: str
    source: Optional[Path] = None


AGENT_DOCS_DIR = "content/en/docs/zero-code/java/agent"


def default_targets() -> List[TargetConfig]:
    return [
        TargetConfig(
            path=f"{AGENT_DOCS_DIR}/supported-libraries.md",
            component="supported-libraries",
            renderer="supported-libraries",
        ),
        TargetConfig(
            path=f"{AGENT_DOCS_DIR}/disable.md",
            component="disable-list",
            renderer="disable-list",
        ),
    ]


@dataclass
class PublishConfig:
    """Target documentation settings."""

    docs_root: Optional[Path] = None
    source_id: str = DEFAULT_SOURCE_ID
    version: Optional[str] = None
    targets: List[TargetConfig] = field(default_factory=default_targets)


@dataclass
class InstrDocsConfig:
    """Represents the settings defined in .instrdocs.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)

    @property
    def scan_root(self) -> Path:
        return self.scan.root or (self.root / self.scan.container)


def load_config(config_path: Path) -> InstrDocsConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return InstrDocsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        scan_root = _as_str(scan_data.get("root"))
        scan.root = (root / scan_root).resolve() if scan_root else None
        scan.container = _as_str(scan_data.get("container")) or DEFAULT_CONTAINER
        workers = _as_int(scan_data.get("workers"))
        scan.workers = workers if workers and workers > 0 else 1
        experimental = _as_str(scan_data.get("experimental_config"))
        scan.experimental_config = root / experimental if experimental else None

    publish = PublishConfig()
    publish_data = _as_dict(data.get("publish"))
    if publish_data:
        docs_root = _as_str(publish_data.get("docs_root"))
        publish.docs_root = (root / docs_root).resolve() if docs_root else None
        publish.source_id = _as_str(publish_data.get("source_id")) or DEFAULT_SOURCE_ID
        publish.version = _as_str(publish_data.get("version"))
        if "targets" in publish_data:
            publish.targets = _parse_targets(publish_data.get("targets"), root)

    return InstrDocsConfig(root=root, scan=scan, publish=publish)


def _parse_targets(value: Any, root: Path) -> List[TargetConfig]:
    targets: List[TargetConfig] = []
    if not isinstance(value, list):
        return targets
    for index, item in enumerate(value):
        entry = _as_dict(item)
        path = _as_str(entry.get("path"))
        component = _as_str(entry.get("component"))
        renderer = _as_str(entry.get("renderer"))
        if not (path and component and renderer):
            raise ConfigError(
                f"publish.targets[{index}] requires 'path', 'component' and 'renderer'"
            )
        source = _as_str(entry.get("source"))
        targets.append(
            TargetConfig(
                path=path,
                component=component,
                renderer=renderer,
                source=(root / source).resolve() if source else None,
            )
        )
    return targets


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "InstrDocsConfig",
    "PublishConfig",
    "ScanConfig",
    "TargetConfig",
    "default_targets",
    "load_config",
]
