"""Per-module file lookups used while enriching entities."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

from .logging import get_logger
from .models import ModuleType

BUILD_DESCRIPTOR = "build.gradle.kts"
METADATA_FILE = "metadata.yaml"
TELEMETRY_DIR = ".telemetry"
RECORDED_CONFIG_DIR = ".config"

_SKIPPED_DIRS = {".git", ".gradle", "node_modules"}

_logger = get_logger("files")


@dataclass
class TelemetryFiles:
    """Declaration files found under a module's telemetry directory."""

    scope: Optional[Path] = None
    metrics: List[Path] = field(default_factory=list)
    spans: List[Path] = field(default_factory=list)

    def is_empty(self) -> bool:
        return self.scope is None and not self.metrics and not self.spans


def descriptor_type(path: str | os.PathLike[str]) -> Optional[ModuleType]:
    """Return the module type implied by a build descriptor's location."""
    parts = Path(path).parts
    if ModuleType.JAVAAGENT.value in parts:
        return ModuleType.JAVAAGENT
    if ModuleType.LIBRARY.value in parts:
        return ModuleType.LIBRARY
    return None


class FileManager:
    """Resolves module directories against the scan base and lists their files."""

    def __init__(self, base: str | os.PathLike[str]) -> None:
        self.base = Path(base)

    def module_dir(self, src_path: str) -> Path:
        return self.base / src_path

    def source_files(self, module_dir: Path) -> List[Path]:
        """Java sources below ``module_dir``, skipping build output and tests."""
        return [
            path
            for path in self._walk_files(module_dir, prune={"build", "test"})
            if path.suffix == ".java"
        ]

    def build_descriptors(self, module_dir: Path) -> List[Path]:
        """Gradle descriptors below ``module_dir``, skipping testing sub-projects."""
        return [
            path
            for path in self._walk_files(module_dir, prune={"build", "testing"})
            if path.name == BUILD_DESCRIPTOR
        ]

    def metadata_file(self, module_dir: Path) -> Optional[str]:
        path = module_dir / METADATA_FILE
        if not path.is_file():
            return None
        return self.read_text(path)

    def telemetry_files(self, module_dir: Path) -> TelemetryFiles:
        found = TelemetryFiles()
        telemetry_dir = module_dir / TELEMETRY_DIR
        if not telemetry_dir.is_dir():
            return found
        for path in sorted(telemetry_dir.iterdir()):
            if not path.is_file():
                continue
            if path.name == "scope.yaml":
                found.scope = path
            elif path.name.startswith("metrics-"):
                found.metrics.append(path)
            elif path.name.startswith("spans-"):
                found.spans.append(path)
        return found

    def recorded_config_files(self, module_dir: Path) -> List[Path]:
        config_dir = module_dir / RECORDED_CONFIG_DIR
        if not config_dir.is_dir():
            return []
        return sorted(
            path
            for path in config_dir.glob("config-*.yaml")
            if path.is_file()
        )

    @staticmethod
    def read_text(path: Path) -> Optional[str]:
        """Read ``path`` as UTF-8, returning None when it cannot be read."""
        try:
            with open(path, "r", encoding="utf-8") as handle:
                return handle.read()
        except (OSError, UnicodeDecodeError) as exc:
            _logger.warning("Unable to read %s: %s", path, exc)
            return None

    @staticmethod
    def _walk_files(root: Path, prune: set[str]) -> Iterator[Path]:
        if not root.is_dir():
            return
        skipped = _SKIPPED_DIRS | prune
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(name for name in dirnames if name not in skipped)
            for filename in sorted(filenames):
                yield Path(dirpath) / filename


__all__ = [
    "BUILD_DESCRIPTOR",
    "FileManager",
    "TelemetryFiles",
    "descriptor_type",
]
