"""Dependency version resolution from Gradle build descriptors."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from .base import Analyzer
from .utils import (
    Range,
    block_bodies,
    exclusion_ranges,
    extract_variables,
    in_ranges,
    interpolate,
    is_test_artifact,
    parse_min_java_version,
)
from ..file_search import FileManager, descriptor_type
from ..logging import get_logger
from ..models import DependencyInfo, InstrumentationEntity, ModuleType

DEFAULT_MIN_JAVA_VERSION = 8

_COORD = r'[^":\s]+:[^":\s]+'

_MUZZLE_RE = re.compile(r"\bmuzzle\s*\{")
_PASS_RE = re.compile(r"\bpass\s*\{")
_CORE_JDK_RE = re.compile(r"\bcoreJdk\(\)")
_MUZZLE_FIELDS = ("group", "module", "versions")

_LIBRARY_RE = re.compile(rf'(?<![\w.])library\("({_COORD}):([^"]+)"\)')
_STRICT_COMPILE_ONLY_RE = re.compile(
    rf'compileOnly\("({_COORD})(?::[^"]+)?"\)\s*\{{\s*version\s*\{{[^{{}}]*?strictly\("([^"]+)"\)'
)
_COMPILE_ONLY_RE = re.compile(rf'compileOnly\("({_COORD}):([^"]+)"\)')
_TEST_LIBRARY_RE = re.compile(rf'(?<![\w.])testLibrary\("({_COORD}):([^"]+)"\)')
_LATEST_DEP_RE = re.compile(rf'latestDepTestLibrary\("({_COORD}):([^"]+)"\)')

_logger = get_logger("analyzers.dependencies")


def _field_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf'\b{name}(?:\.set\(\s*|\s*=\s*)"([^"]+)"')


_FIELD_PATTERNS = {name: _field_pattern(name) for name in _MUZZLE_FIELDS}


class _VersionBounds:
    """Lower/upper bound pair for one coordinate in the library cascade."""

    __slots__ = ("lower", "upper")

    def __init__(self, version: str) -> None:
        self.lower: Optional[str] = None
        self.upper = version

    def render(self) -> str:
        if self.lower is None:
            return self.upper
        return f"[{self.lower},{self.upper})"


class DependencyResolver(Analyzer):
    """Extracts supported dependency versions from build descriptors.

    Agent-integrated descriptors are read through their ``muzzle`` pass
    blocks. Standalone-library descriptors go through a priority cascade of
    ``library``, ``compileOnly`` and ``testLibrary`` declarations.
    """

    name = "dependencies"

    def supports(self, entity: InstrumentationEntity) -> bool:
        return bool(entity.types)

    def analyze(self, entity: InstrumentationEntity, files: FileManager) -> None:
        module_dir = files.module_dir(entity.src_path)
        self.extract_versions(files.build_descriptors(module_dir), entity, files)

    def resolve(self, text: str, module_type: ModuleType) -> DependencyInfo:
        """Return the versions and minimum Java version declared by ``text``."""
        variables = extract_variables(text)
        ranges = exclusion_ranges(text)
        min_java = parse_min_java_version(text, ranges)

        if module_type is ModuleType.JAVAAGENT:
            versions = self._resolve_muzzle(text, variables, min_java)
        else:
            versions = self._resolve_library(text, variables, ranges)
        return DependencyInfo(versions=versions, min_java_version=min_java)

    def extract_versions(
        self,
        descriptors: Iterable[Path],
        entity: InstrumentationEntity,
        files: FileManager,
    ) -> Dict[ModuleType, Set[str]]:
        """Resolve each descriptor and merge the results into ``entity``."""
        found: Dict[ModuleType, Set[str]] = {}
        for path in descriptors:
            module_type = descriptor_type(self._relative(path, files.base))
            if module_type is None:
                _logger.debug("Skipping %s, no module type segment", path)
                continue
            text = files.read_text(path)
            if text is None:
                continue
            info = self.resolve(text, module_type)
            found.setdefault(module_type, set()).update(info.versions)
            entity.add_target_versions(module_type, info.versions)
            entity.record_min_java_version(info.min_java_version)
        return found

    @staticmethod
    def _relative(path: Path, base: Path) -> Path:
        try:
            return path.relative_to(base)
        except ValueError:
            return path

    def _resolve_muzzle(
        self, text: str, variables: Dict[str, str], min_java: Optional[int]
    ) -> Set[str]:
        results: Set[str] = set()
        for _, _, body in block_bodies(text, _MUZZLE_RE):
            for _, _, block in block_bodies(body, _PASS_RE):
                if _CORE_JDK_RE.search(block):
                    results.add(f"Java {min_java or DEFAULT_MIN_JAVA_VERSION}+")
                    continue
                values = [self._field(block, name) for name in _MUZZLE_FIELDS]
                if None in values:
                    continue
                group, module, versions = values
                results.add(f"{group}:{module}:{interpolate(versions, variables)}")
        return results

    @staticmethod
    def _field(block: str, name: str) -> Optional[str]:
        match = _FIELD_PATTERNS[name].search(block)
        return match.group(1) if match else None

    def _resolve_library(
        self, text: str, variables: Dict[str, str], ranges: Sequence[Range]
    ) -> Set[str]:
        selected: Dict[str, _VersionBounds] = {}

        for coordinate, version in _LIBRARY_RE.findall(text):
            selected[coordinate] = _VersionBounds(version)

        if not selected:
            for coordinate, version in self._compile_only(text, ranges):
                selected[coordinate] = _VersionBounds(version)
            self._enrich_from_test_libraries(text, selected)

        if not selected:
            for coordinate, version in _TEST_LIBRARY_RE.findall(text):
                if is_test_artifact(coordinate) or coordinate in selected:
                    continue
                selected[coordinate] = _VersionBounds(version)

        for coordinate, version in _LATEST_DEP_RE.findall(text):
            bounds = selected.get(coordinate)
            if bounds is None:
                continue
            if bounds.lower is None:
                bounds.lower = bounds.upper
            bounds.upper = version

        return {
            interpolate(f"{coordinate}:{bounds.render()}", variables)
            for coordinate, bounds in selected.items()
        }

    @staticmethod
    def _compile_only(text: str, ranges: Sequence[Range]) -> List[Tuple[str, str]]:
        strict: Dict[str, str] = {}
        for match in _STRICT_COMPILE_ONLY_RE.finditer(text):
            if in_ranges(match.start(), ranges):
                continue
            strict[match.group(1)] = match.group(2)

        entries = dict(strict)
        for match in _COMPILE_ONLY_RE.finditer(text):
            if in_ranges(match.start(), ranges):
                continue
            entries.setdefault(match.group(1), match.group(2))
        return list(entries.items())

    @staticmethod
    def _enrich_from_test_libraries(text: str, selected: Dict[str, _VersionBounds]) -> None:
        for coordinate, version in _TEST_LIBRARY_RE.findall(text):
            bounds = selected.get(coordinate)
            if bounds is None or bounds.lower is not None:
                continue
            if version != bounds.upper and "+" not in version:
                bounds.lower = version


__all__ = ["DEFAULT_MIN_JAVA_VERSION", "DependencyResolver"]
