"""Recorded configuration usage written by test runs and read back during analysis."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from .file_search import RECORDED_CONFIG_DIR
from .logging import get_logger
from .models import ConfigurationProperty

ROOT_PATH = "instrumentation"

_logger = get_logger("recorder")


@dataclass(frozen=True)
class ConfigUsage:
    """A single configuration lookup observed at ``path``."""

    path: str
    key: str
    type: str
    default: Optional[str] = None
    actual: Optional[str] = None

    @property
    def was_default_used(self) -> bool:
        if self.default is None:
            return False
        return self.actual is None or self.actual == self.default


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigUsageRecorder:
    """Accumulates configuration lookups under a dotted path prefix.

    ``nested`` returns a recorder that shares this recorder's store, so a
    lookup through any descendant lands in the same accumulator.
    """

    def __init__(
        self, prefix: str = ROOT_PATH, store: Optional[Dict[str, ConfigUsage]] = None
    ) -> None:
        self.prefix = prefix
        self._store: Dict[str, ConfigUsage] = store if store is not None else {}

    def nested(self, name: str) -> "ConfigUsageRecorder":
        return ConfigUsageRecorder(f"{self.prefix}.{name}", self._store)

    def record(
        self, key: str, type: str, default: Any = None, actual: Any = None
    ) -> ConfigUsage:
        path = f"{self.prefix}.{key}"
        existing = self._store.get(path)
        if existing is not None:
            return existing
        usage = ConfigUsage(
            path=path, key=key, type=type, default=_text(default), actual=_text(actual)
        )
        self._store[path] = usage
        return usage

    @property
    def usages(self) -> List[ConfigUsage]:
        return list(self._store.values())

    def to_hierarchy(self) -> Dict[str, Any]:
        """Nest usages by path segment, skipping purely numeric segments."""
        root: Dict[str, Any] = {}
        for usage in self._store.values():
            parts = usage.path.split(".")
            if parts[-1].isdigit():
                continue
            current = root
            for part in parts[:-1]:
                if part.isdigit():
                    continue
                current = current.setdefault(part, {})
            current[parts[-1]] = {"type": usage.type, "default": usage.default}
        return _sorted(root)

    def write(self, module_dir: Path) -> Optional[Path]:
        """Write the hierarchy to a fresh file under ``module_dir/.config``."""
        if not self._store:
            return None
        config_dir = module_dir / RECORDED_CONFIG_DIR
        config_dir.mkdir(parents=True, exist_ok=True)
        target = config_dir / f"config-{uuid.uuid4()}.yaml"
        with open(target, "w", encoding="utf-8") as handle:
            yaml.safe_dump(self.to_hierarchy(), handle, default_flow_style=False, sort_keys=True)
        _logger.debug("Recorded %d configuration usages to %s", len(self._store), target)
        return target


def _sorted(mapping: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _sorted(value) if isinstance(value, dict) and "type" not in value else value
        for key, value in sorted(mapping.items())
    }


def load_recorded_properties(texts: Iterable[str]) -> List[ConfigurationProperty]:
    """Flatten recorded usage documents into configuration properties."""
    properties: List[ConfigurationProperty] = []
    seen = set()
    for text in texts:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            _logger.warning("Ignoring malformed recorded configuration: %s", exc)
            continue
        if not isinstance(data, dict):
            continue
        for name, leaf in _flatten(data, ""):
            if name in seen:
                continue
            seen.add(name)
            properties.append(
                ConfigurationProperty(
                    name=name, type=str(leaf.get("type")), default=_text(leaf.get("default"))
                )
            )
    return properties


def _flatten(node: Dict[str, Any], prefix: str) -> Iterable[tuple[str, Dict[str, Any]]]:
    for key, value in node.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if not isinstance(value, dict):
            continue
        if "type" in value and not isinstance(value.get("type"), dict):
            yield path, value
        else:
            yield from _flatten(value, path)


__all__ = ["ConfigUsage", "ConfigUsageRecorder", "load_recorded_properties"]
