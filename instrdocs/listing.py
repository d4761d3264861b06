"""Structured entity listing written as YAML."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, TextIO

import yaml

from .aggregator import sort_entities
from .models import InstrumentationEntity


def _entity_entry(entity: InstrumentationEntity) -> Dict[str, Any]:
    entry: Dict[str, Any] = {"name": entity.name, "namespace": entity.namespace}
    metadata = entity.metadata
    if metadata is not None:
        if metadata.display_name:
            entry["display_name"] = metadata.display_name
        if metadata.description:
            entry["description"] = metadata.description
        if metadata.library_link:
            entry["library_link"] = metadata.library_link
        if metadata.disabled_by_default:
            entry["disabled_by_default"] = True
    entry["srcPath"] = entity.src_path
    entry["types"] = [module_type.value for module_type in entity.types]
    if entity.min_java_version is not None:
        entry["minimum_java_version"] = entity.min_java_version
    if entity.semantic_conventions:
        entry["semantic_conventions"] = sorted(entity.semantic_conventions)
    if entity.span_types:
        entry["span_types"] = sorted(entity.span_types)
    entry["target_versions"] = {
        module_type.value: sorted(versions)
        for module_type, versions in sorted(
            entity.target_versions.items(), key=lambda item: item[0].value
        )
    }
    if entity.configurations:
        entry["configurations"] = [
            {"name": prop.name, "type": prop.type, "default": prop.default}
            for prop in entity.configurations
        ]

    telemetry = entity.telemetry
    if telemetry is not None:
        if telemetry.scope:
            entry["scope"] = telemetry.scope
        if telemetry.metrics:
            entry["metrics"] = telemetry.metrics
        span_data: Dict[str, Any] = {}
        if telemetry.span_kinds:
            span_data["span_kinds"] = list(telemetry.span_kinds)
        if telemetry.span_attributes:
            span_data["attributes"] = telemetry.span_attributes
        if span_data:
            entry["span_data"] = span_data
    return entry


def build_listing(entities: Iterable[InstrumentationEntity]) -> Dict[str, Any]:
    """Group entities by sorted group name, each group sorted by module name."""
    listing: Dict[str, Any] = {}
    for entity in sort_entities(entities):
        group = listing.setdefault(entity.group, {"instrumentations": []})
        instrumentations: List[Dict[str, Any]] = group["instrumentations"]
        instrumentations.append(_entity_entry(entity))
    return listing


def dump_listing(entities: Iterable[InstrumentationEntity], stream: TextIO) -> None:
    yaml.safe_dump(
        build_listing(entities),
        stream,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


__all__ = ["build_listing", "dump_listing"]
