"""Core data models shared across instrdocs components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple


class ModuleType(str, Enum):
    """Deployment flavour of a module directory."""

    JAVAAGENT = "javaagent"
    LIBRARY = "library"

    @classmethod
    def from_segment(cls, segment: str | None) -> Optional["ModuleType"]:
        for member in cls:
            if member.value == segment:
                return member
        return None

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ModulePath:
    """A directory recognised as one module of one type."""

    name: str
    src_path: str
    namespace: str
    group: str
    type: ModuleType

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.group, self.namespace, self.name)


@dataclass(frozen=True)
class ConfigurationProperty:
    """A configuration setting read by module code."""

    name: str
    type: str
    default: Optional[str] = None


@dataclass
class DependencyInfo:
    """Versions and platform floor resolved from a single build descriptor."""

    versions: Set[str] = field(default_factory=set)
    min_java_version: Optional[int] = None


@dataclass
class EntityMetadata:
    """Human-authored details loaded from a module's sidecar file."""

    display_name: Optional[str] = None
    library_link: Optional[str] = None
    description: Optional[str] = None
    disabled_by_default: bool = False
    classification: Optional[str] = None
    semantic_conventions: List[str] = field(default_factory=list)


@dataclass
class EmittedTelemetry:
    """Telemetry declared under a module's `.telemetry` directory."""

    scope: Dict[str, Any] = field(default_factory=dict)
    metrics: List[Dict[str, Any]] = field(default_factory=list)
    span_kinds: List[str] = field(default_factory=list)
    span_attributes: List[Dict[str, Any]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.scope or self.metrics or self.span_kinds or self.span_attributes)


@dataclass(eq=False)
class InstrumentationEntity:
    """Aggregated record of one logical module across all of its types.

    Identity is the ``(group, namespace, name)`` key; every other attribute
    only ever grows while a run is in progress.
    """

    src_path: str
    name: str
    namespace: str
    group: str
    types: List[ModuleType] = field(default_factory=list)
    target_versions: Dict[ModuleType, Set[str]] = field(default_factory=dict)
    min_java_version: Optional[int] = None
    configurations: List[ConfigurationProperty] = field(default_factory=list)
    semantic_conventions: Set[str] = field(default_factory=set)
    span_types: Set[str] = field(default_factory=set)
    metadata: Optional[EntityMetadata] = None
    telemetry: Optional[EmittedTelemetry] = None

    @property
    def key(self) -> Tuple[str, str, str]:
        return (self.group, self.namespace, self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InstrumentationEntity):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def add_type(self, module_type: ModuleType) -> None:
        if module_type not in self.types:
            self.types.append(module_type)

    def add_target_versions(self, module_type: ModuleType, versions: Iterable[str]) -> None:
        self.target_versions.setdefault(module_type, set()).update(versions)

    def record_min_java_version(self, version: Optional[int]) -> None:
        if version is None:
            return
        if self.min_java_version is None or version > self.min_java_version:
            self.min_java_version = version

    def add_configuration(self, prop: ConfigurationProperty) -> None:
        if any(existing.name == prop.name for existing in self.configurations):
            return
        self.configurations.append(prop)

    def add_capabilities(
        self,
        *,
        semantic_conventions: Iterable[str] = (),
        span_types: Iterable[str] = (),
    ) -> None:
        self.semantic_conventions.update(semantic_conventions)
        self.span_types.update(span_types)


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of reconciling generated content into a document."""

    success: bool
    content: Optional[str] = None
    changed: bool = False
    error: Optional[str] = None

    @classmethod
    def succeeded(cls, content: str, changed: bool) -> "UpdateResult":
        return cls(success=True, content=content, changed=changed)

    @classmethod
    def failed(cls, message: str) -> "UpdateResult":
        return cls(success=False, error=message)
