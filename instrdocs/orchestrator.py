"""Pipeline orchestration for list and publish runs."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .aggregator import InstrumentationAnalyzer
from .analyzers.configuration import ConfigurationScanner, extract_config_accessors
from .analyzers.sources import SourceFactScanner
from .config import InstrDocsConfig, TargetConfig
from .file_search import FileManager
from .logging import get_logger
from .models import InstrumentationEntity, UpdateResult
from .path_classifier import PathClassifier
from .postproc.markers import MarkerManager
from .renderers import build_renderers
from .renderers.disable_list import DisableListRenderer
from .renderers.table_parser import SupportedLibrariesTableParser

VERSION_FILE = "version.gradle.kts"

_VERSION_RE = re.compile(r'version\s*=\s*"([^"]+)"')

SOURCE_RENDERERS = ("libraries-table", "disable-list-yaml")


def detect_version(root: Path) -> str:
    """Version label from ``version.gradle.kts``, or ``latest`` when absent."""
    version_file = root / VERSION_FILE
    if not version_file.is_file():
        return "latest"
    try:
        with open(version_file, "r", encoding="utf-8") as handle:
            match = _VERSION_RE.search(handle.read())
    except OSError:
        return "latest"
    return f"v{match.group(1)}" if match else "latest"


@dataclass
class TargetOutcome:
    """Result of reconciling one publish target."""

    target: TargetConfig
    path: Path
    result: UpdateResult


@dataclass
class PublishReport:
    """Per-target outcomes of a publish run."""

    version: str
    dry_run: bool = False
    outcomes: List[TargetOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[TargetOutcome]:
        return [outcome for outcome in self.outcomes if outcome.result.success]

    @property
    def failed(self) -> List[TargetOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.result.success]

    @property
    def changed(self) -> List[TargetOutcome]:
        return [outcome for outcome in self.succeeded if outcome.result.changed]

    @property
    def exit_code(self) -> int:
        if not self.outcomes or self.succeeded:
            return 0
        return 1


class Orchestrator:
    """Coordinates analysis, rendering and reconciliation."""

    def __init__(
        self,
        analyzer: InstrumentationAnalyzer | None = None,
        marker_manager: MarkerManager | None = None,
        table_parser: SupportedLibrariesTableParser | None = None,
    ) -> None:
        self._analyzer = analyzer
        self.marker_manager = marker_manager or MarkerManager()
        self.table_parser = table_parser or SupportedLibrariesTableParser()
        self.logger = get_logger("orchestrator")

    def run_list(self, config: InstrDocsConfig) -> List[InstrumentationEntity]:
        """Analyze the configured source root and return sorted entities."""
        scan_root = config.scan_root
        if not scan_root.is_dir():
            raise FileNotFoundError(f"Source root does not exist: {scan_root}")
        self.logger.info("Analyzing modules under %s", scan_root)
        entities = self._resolve_analyzer(config).analyze(scan_root)
        self.logger.info("Collected %d instrumentation entities", len(entities))
        return entities

    def run_publish(self, config: InstrDocsConfig, *, dry_run: bool = False) -> PublishReport:
        """Render every configured target and reconcile it into the docs tree."""
        docs_root = config.publish.docs_root
        if docs_root is None or not docs_root.is_dir():
            raise FileNotFoundError(f"Documentation root does not exist: {docs_root}")

        version = config.publish.version or detect_version(config.root)
        report = PublishReport(version=version, dry_run=dry_run)
        renderers = build_renderers(version)
        entities: Optional[List[InstrumentationEntity]] = None

        for target in config.publish.targets:
            path = docs_root / target.path
            if target.renderer in SOURCE_RENDERERS:
                content = self._render_from_source(target, version)
            elif target.renderer in renderers:
                if entities is None:
                    entities = self.run_list(config)
                content = renderers[target.renderer](entities)
            else:
                content = None
            if content is None:
                result = UpdateResult.failed(
                    f"Renderer '{target.renderer}' cannot produce content for {target.component}"
                )
            else:
                result = self._reconcile(path, target, config.publish.source_id, content, dry_run)
            report.outcomes.append(TargetOutcome(target=target, path=path, result=result))

        self._log_summary(report)
        return report

    def _reconcile(
        self,
        path: Path,
        target: TargetConfig,
        source_id: str,
        content: str,
        dry_run: bool,
    ) -> UpdateResult:
        if not path.is_file():
            self.logger.warning("Target file not found: %s", path)
            return UpdateResult.failed(f"Target document not found: {path}")
        if not self.marker_manager.file_has_markers(path, target.component, source_id):
            begin, _ = self.marker_manager.markers(target.component, source_id)
            self.logger.warning("Markers not found in %s, expected %s", path, begin)
            return UpdateResult.failed(
                self.marker_manager.not_found_message(target.component, source_id)
            )
        result = self.marker_manager.update_file(
            path, target.component, source_id, content, dry_run=dry_run
        )
        if not result.success:
            self.logger.error("Failed to update %s: %s", path, result.error)
        elif result.changed:
            self.logger.info("Updated %s%s", path.name, " (dry-run)" if dry_run else "")
        else:
            self.logger.info("No changes for %s", path.name)
        return result

    def _render_from_source(self, target: TargetConfig, version: str) -> Optional[str]:
        if target.source is None or not target.source.is_file():
            self.logger.warning(
                "Renderer %s requires an existing source file, got %s",
                target.renderer,
                target.source,
            )
            return None
        text = FileManager.read_text(target.source)
        if text is None:
            return None
        render: Dict[str, Callable[[str], str]] = {
            "libraries-table": self.table_parser.parse_and_transform,
            "disable-list-yaml": DisableListRenderer(version).render_from_yaml,
        }
        return render[target.renderer](text)

    def _resolve_analyzer(self, config: InstrDocsConfig) -> InstrumentationAnalyzer:
        if self._analyzer is not None:
            return self._analyzer
        accessors = {}
        experimental = config.scan.experimental_config
        if experimental is not None:
            if experimental.is_file():
                accessors = extract_config_accessors(FileManager.read_text(experimental) or "")
                self.logger.debug(
                    "Loaded %d experimental accessors from %s", len(accessors), experimental
                )
            else:
                self.logger.warning("Experimental config source not found: %s", experimental)
        self._analyzer = InstrumentationAnalyzer(
            classifier=PathClassifier(config.scan.container),
            scanner=SourceFactScanner(ConfigurationScanner(accessors)),
            workers=config.scan.workers,
        )
        return self._analyzer

    def _log_summary(self, report: PublishReport) -> None:
        if not report.outcomes:
            self.logger.info("No publish targets configured")
            return
        for outcome in report.failed:
            self.logger.warning("%s: %s", outcome.target.component, outcome.result.error)
        if report.changed:
            self.logger.info("Documentation updated (%d page(s))", len(report.changed))
        elif report.succeeded:
            self.logger.info("All documentation is already up to date")


__all__ = ["Orchestrator", "PublishReport", "TargetOutcome", "detect_version"]
