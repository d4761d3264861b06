"""Source-level facts: capability markers and configuration properties."""

from __future__ import annotations

from typing import Mapping, Optional

from .base import Analyzer
from .configuration import ConfigurationScanner
from .markers import SEMCONV_MARKERS, SPAN_TYPE_MARKERS, scan_for_markers
from ..file_search import FileManager
from ..models import InstrumentationEntity
from ..recorder import load_recorded_properties


class SourceFactScanner(Analyzer):
    """Scans an entity's Java sources for capability markers and settings.

    Recorded configuration usage under the module's ``.config`` directory is
    merged after the statically extracted properties.
    """

    name = "sources"

    def __init__(
        self,
        configuration: Optional[ConfigurationScanner] = None,
        semconv_markers: Mapping[str, str] = SEMCONV_MARKERS,
        span_type_markers: Mapping[str, str] = SPAN_TYPE_MARKERS,
    ) -> None:
        self.configuration = configuration or ConfigurationScanner()
        self.semconv_markers = semconv_markers
        self.span_type_markers = span_type_markers

    def supports(self, entity: InstrumentationEntity) -> bool:
        return True

    def analyze(self, entity: InstrumentationEntity, files: FileManager) -> None:
        module_dir = files.module_dir(entity.src_path)
        sources = files.source_files(module_dir)

        entity.add_capabilities(
            semantic_conventions=scan_for_markers(sources, self.semconv_markers),
            span_types=scan_for_markers(sources, self.span_type_markers),
        )
        for prop in self.configuration.scan(sources):
            entity.add_configuration(prop)

        recorded = [
            text
            for text in (files.read_text(path) for path in files.recorded_config_files(module_dir))
            if text is not None
        ]
        for prop in load_recorded_properties(recorded):
            entity.add_configuration(prop)


__all__ = ["SourceFactScanner"]
