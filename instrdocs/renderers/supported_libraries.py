"""Markdown tables for the supported libraries page."""

from __future__ import annotations

from typing import Iterable, List

from .formatting import format_category, format_version_range, library_family
from ..config import DEFAULT_CONTAINER
from ..models import InstrumentationEntity, ModuleType

HEADER = (
    "| Library/Framework | Auto-instrumented versions | "
    "Standalone Library Instrumentation [1] | Functionality / Semantic Conventions |"
)
SEPARATOR = (
    "| ----------------- | -------------------------- | "
    "-------------------------------------- | ------------------------------------ |"
)

APP_SERVER_TOKENS = ("tomcat", "jetty", "websphere", "wildfly", "undertow", "glassfish")


def is_app_server(entity: InstrumentationEntity) -> bool:
    lowered = entity.name.lower()
    return any(token in lowered for token in APP_SERVER_TOKENS)


def _display_name(entity: InstrumentationEntity) -> str:
    if entity.metadata is not None and entity.metadata.display_name:
        return entity.metadata.display_name
    return entity.name


def _versions(entity: InstrumentationEntity) -> str:
    versions = entity.target_versions.get(ModuleType.JAVAAGENT)
    if not versions:
        return "N/A"
    return "<br>".join(format_version_range(version) for version in sorted(versions))


def _library_instrumentation(
    entity: InstrumentationEntity, container: str = DEFAULT_CONTAINER
) -> str:
    if ModuleType.LIBRARY not in entity.types:
        return "N/A"
    parts = entity.src_path.split("/")
    if container not in parts[:-1]:
        return "N/A"
    below = parts[parts.index(container) + 1 :]
    # links are relative to the container directory
    return f"[opentelemetry-{below[0]}](../{'/'.join(below)}/library)"


def _semantic_conventions(entity: InstrumentationEntity) -> str:
    if entity.metadata is None or not entity.metadata.semantic_conventions:
        return "none"
    return ", ".join(
        f"[{format_category(convention)}]" for convention in entity.metadata.semantic_conventions
    )


class SupportedLibrariesRenderer:
    """Renders entities with sidecar metadata as markdown tables."""

    def __init__(self, version: str) -> None:
        self.version = version

    def _footer(self) -> List[str]:
        return ["", f"_Auto-generated for version {self.version}_"]

    def render(self, entities: Iterable[InstrumentationEntity]) -> str:
        documented = sorted(
            (entity for entity in entities if entity.metadata is not None),
            key=lambda entity: (library_family(entity.name), entity.name),
        )
        lines = [HEADER, SEPARATOR]
        for entity in documented:
            name = _display_name(entity)
            link = entity.metadata.library_link if entity.metadata else None
            label = f"[{name}]({link})" if link else name
            lines.append(
                f"| {label} | {_versions(entity)} | "
                f"{_library_instrumentation(entity)} | {_semantic_conventions(entity)} |"
            )
        lines.extend(self._footer())
        return "\n".join(lines) + "\n"

    def render_app_servers(self, entities: Iterable[InstrumentationEntity]) -> str:
        servers = sorted(
            (entity for entity in entities if entity.metadata is not None and is_app_server(entity)),
            key=lambda entity: entity.name,
        )
        if not servers:
            return "No application servers documented.\n"
        lines = ["| Application Server | Versions |", "|--------------------|----------|"]
        for entity in servers:
            lines.append(f"| {_display_name(entity)} | {_versions(entity)} |")
        lines.extend(self._footer())
        return "\n".join(lines) + "\n"


__all__ = ["SupportedLibrariesRenderer", "is_app_server"]
