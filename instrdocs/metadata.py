"""Sidecar metadata and telemetry declaration parsing."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import yaml

from .analyzers.base import Analyzer
from .file_search import FileManager
from .logging import get_logger
from .models import EmittedTelemetry, EntityMetadata, InstrumentationEntity

_logger = get_logger("metadata")


def _load_mapping(text: str, source: str) -> Optional[Dict[str, Any]]:
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        _logger.warning("Ignoring malformed YAML in %s: %s", source, exc)
        return None
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        _logger.warning("Ignoring %s, expected a mapping at the root", source)
        return None
    return loaded


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def _as_mapping_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def parse_metadata(text: str, source: str = "metadata.yaml") -> Optional[EntityMetadata]:
    """Parse a sidecar description document, returning None when malformed."""
    data = _load_mapping(text, source)
    if data is None:
        return None
    conventions = data.get("semantic_conventions") or []
    if not isinstance(conventions, list):
        conventions = [conventions]
    return EntityMetadata(
        display_name=_as_str(data.get("display_name")),
        library_link=_as_str(data.get("library_link")),
        description=_as_str(data.get("description")),
        disabled_by_default=data.get("disabled_by_default") is True,
        classification=_as_str(data.get("classification")),
        semantic_conventions=[str(item) for item in conventions if item is not None],
    )


def merge_telemetry(
    telemetry: EmittedTelemetry, kind: str, text: str, source: str
) -> None:
    """Merge one telemetry declaration document of ``kind`` into ``telemetry``.

    ``kind`` is ``scope``, ``metrics`` or ``spans``. Metrics and span
    attributes are de-duplicated by name.
    """
    data = _load_mapping(text, source)
    if not data:
        return

    if kind == "scope":
        scope = data.get("scope")
        if isinstance(scope, dict):
            telemetry.scope = dict(scope)
        return

    if kind == "metrics":
        known = {metric.get("name") for metric in telemetry.metrics}
        for metric in _as_mapping_list(data.get("metrics")):
            if metric.get("name") not in known:
                known.add(metric.get("name"))
                telemetry.metrics.append(metric)
        return

    if kind == "spans":
        known = {attribute.get("name") for attribute in telemetry.span_attributes}
        for span in _as_mapping_list(data.get("spans")):
            span_kind = _as_str(span.get("span_kind"))
            if span_kind and span_kind not in telemetry.span_kinds:
                telemetry.span_kinds.append(span_kind)
            for attribute in _as_mapping_list(span.get("attributes")):
                if attribute.get("name") not in known:
                    known.add(attribute.get("name"))
                    telemetry.span_attributes.append(attribute)
        return

    _logger.debug("Unknown telemetry kind %s for %s", kind, source)


class MetadataAnalyzer(Analyzer):
    """Attaches sidecar metadata and declared telemetry to an entity."""

    name = "metadata"

    def supports(self, entity: InstrumentationEntity) -> bool:
        return True

    def analyze(self, entity: InstrumentationEntity, files: FileManager) -> None:
        module_dir = files.module_dir(entity.src_path)

        text = files.metadata_file(module_dir)
        if text is not None:
            metadata = parse_metadata(text, f"{entity.src_path}/metadata.yaml")
            if metadata is not None:
                entity.metadata = metadata

        found = files.telemetry_files(module_dir)
        if found.is_empty():
            return
        telemetry = entity.telemetry or EmittedTelemetry()
        sources = [("scope", found.scope)] if found.scope else []
        sources += [("metrics", path) for path in found.metrics]
        sources += [("spans", path) for path in found.spans]
        for kind, path in sources:
            content = files.read_text(path)
            if content is not None:
                merge_telemetry(telemetry, kind, content, str(path))
        if not telemetry.is_empty():
            entity.telemetry = telemetry


__all__ = ["MetadataAnalyzer", "merge_telemetry", "parse_metadata"]
