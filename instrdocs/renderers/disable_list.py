"""Markdown table of instrumentation names that can be disabled."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Set

import yaml

from .formatting import display_name
from ..logging import get_logger
from ..models import InstrumentationEntity

EXCLUSIONS = frozenset({"resources", "spring-boot-resources"})
NAME_OVERRIDES: Dict[str, str] = {"akka-actor-fork-join": "akka-actor"}

_VERSION_SUFFIX_RE = re.compile(r"-[0-9].*$")

_logger = get_logger("renderers.disable_list")


def sanitize_names(names: Iterable[str]) -> List[str]:
    """Strip version suffixes, drop exclusions, apply overrides, sort and dedupe."""
    cleaned: Set[str] = set()
    for name in names:
        base = _VERSION_SUFFIX_RE.sub("", name, count=1)
        if base in EXCLUSIONS:
            continue
        cleaned.add(NAME_OVERRIDES.get(base, base))
    return sorted(cleaned)


def names_from_listing(text: str) -> List[str]:
    """Instrumentation names from a ``libraries:`` listing document."""
    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        _logger.warning("Unable to parse instrumentation list: %s", exc)
        return []
    if not isinstance(data, dict) or not isinstance(data.get("libraries"), dict):
        return []
    names: List[str] = []
    for group in data["libraries"].values():
        if not isinstance(group, list):
            continue
        for item in group:
            if isinstance(item, dict) and isinstance(item.get("name"), str):
                names.append(item["name"])
    return names


class DisableListRenderer:
    """Renders the disable-list table."""

    def __init__(self, version: str) -> None:
        self.version = version

    def render(self, entities: Iterable[InstrumentationEntity]) -> str:
        return self._table(sanitize_names(entity.name for entity in entities))

    def render_from_yaml(self, text: str) -> str:
        return self._table(sanitize_names(names_from_listing(text)))

    def _table(self, names: List[str]) -> str:
        lines = [
            "| Library/Framework | Instrumentation name |",
            "| ----------------- | -------------------- |",
        ]
        lines.extend(f"| {display_name(name)} | `{name}` |" for name in names)
        lines.extend(["", f"_Auto-generated for version {self.version}_"])
        return "\n".join(lines) + "\n"


__all__ = ["DisableListRenderer", "names_from_listing", "sanitize_names"]
