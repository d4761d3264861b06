"""Configuration property extraction from Java sources."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from .utils import method_bodies
from ..file_search import FileManager
from ..models import ConfigurationProperty

EXPERIMENTAL_CALL_PREFIX = "ExperimentalConfig.get()."

_FIELD_RE = re.compile(
    r"private static final (\w+) \w+ =\s*"
    r'AgentInstrumentationConfig\.get\(\)\s*\.get(\w+)\("([^"]+)",\s*([^)]+)\);',
    re.DOTALL,
)
_ACCESSOR_HEADER_RE = re.compile(
    r"public\s+(?:static\s+)?[\w<>\[\], ?]+\s+(\w+)\s*\(\s*\)\s*\{"
)
_ACCESSOR_CALL_RE = re.compile(
    r'\bconfig\.(get\w+)\(\s*"([^"]+)"\s*(?:,\s*([^)]+?))?\s*\)'
)


def parse_config_properties(text: str) -> List[ConfigurationProperty]:
    """Return properties read into ``private static final`` fields."""
    return [
        ConfigurationProperty(name=key, type=declared.lower(), default=default.strip())
        for declared, _, key, default in _FIELD_RE.findall(text)
    ]


def extract_config_accessors(text: str) -> Dict[str, ConfigurationProperty]:
    """Map ``methodName()`` to the property its zero-argument accessor reads."""
    accessors: Dict[str, ConfigurationProperty] = {}
    for method, body in method_bodies(text, _ACCESSOR_HEADER_RE):
        match = _ACCESSOR_CALL_RE.search(body)
        if not match:
            continue
        getter, key, default = match.groups()
        accessors[f"{method}()"] = ConfigurationProperty(
            name=key,
            type=getter[len("get"):],
            default=default.strip() if default else None,
        )
    return accessors


class ConfigurationScanner:
    """Finds configuration properties declared in or used by source files.

    ``accessors`` is a side table built from a shared configuration class so
    that a call site in one file resolves to a declaration in another.
    """

    def __init__(
        self,
        accessors: Optional[Mapping[str, ConfigurationProperty]] = None,
        call_prefix: str = EXPERIMENTAL_CALL_PREFIX,
        reader: Optional[Callable[[Path], Optional[str]]] = None,
    ) -> None:
        self.accessors = dict(accessors or {})
        self.call_prefix = call_prefix
        self._reader = reader or FileManager.read_text

    def scan(self, files: Iterable[Path]) -> List[ConfigurationProperty]:
        properties: List[ConfigurationProperty] = []
        seen = set()

        def _add(prop: ConfigurationProperty) -> None:
            if prop.name not in seen:
                seen.add(prop.name)
                properties.append(prop)

        for path in files:
            text = self._reader(path)
            if text is None:
                continue
            for prop in parse_config_properties(text):
                _add(prop)
            for method, prop in self.accessors.items():
                if self.call_prefix + method in text:
                    _add(prop)
        return properties


__all__ = [
    "ConfigurationScanner",
    "EXPERIMENTAL_CALL_PREFIX",
    "extract_config_accessors",
    "parse_config_properties",
]
