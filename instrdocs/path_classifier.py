"""Discovery of module directories inside the instrumentation tree."""

from __future__ import annotations

import os
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Sequence

from .config import DEFAULT_CONTAINER
from .logging import get_logger
from .models import ModulePath, ModuleType

_EXCLUDED_DIRS = {
    ".git",
    ".gradle",
    ".idea",
    ".kotlin",
    "build",
    "out",
    "node_modules",
    "__pycache__",
}

_logger = get_logger("classifier")


def _segments(path: str | os.PathLike[str] | None) -> List[str]:
    if path is None:
        return []
    text = os.fspath(path).replace("\\", "/")
    return [part for part in text.split("/") if part and part != "."]


def _is_denylisted(parts: Sequence[str]) -> bool:
    for index, part in enumerate(parts):
        if part == "test" or part.startswith("testing"):
            return True
        # shared "-common" directories only hold helpers for sibling modules
        if part.endswith("-common") and index < len(parts) - 1:
            return True
        if part == "bootstrap" and index + 1 < len(parts) and parts[index + 1] == "src":
            return True
    return False


def is_valid_module_path(
    path: str | os.PathLike[str] | None, container: str = DEFAULT_CONTAINER
) -> bool:
    """Return True when ``path`` has the shape of a module-type directory."""
    parts = _segments(path)
    if not parts or container not in parts:
        return False
    if parts.count(ModuleType.JAVAAGENT.value) > 1:
        return False
    if _is_denylisted(parts):
        return False
    return ModuleType.from_segment(parts[-1]) is not None


def parse_module_path(
    path: str | os.PathLike[str] | None, container: str = DEFAULT_CONTAINER
) -> Optional[ModulePath]:
    """Derive name, namespace and group from a module-type directory.

    Returns None for input that does not carry a container segment followed
    by at least a module name and a type segment.
    """
    parts = _segments(path)
    if container not in parts:
        return None
    below_container = parts[len(parts) - parts[::-1].index(container):]
    if len(below_container) < 2:
        return None

    module_type = ModuleType.from_segment(below_container[-1])
    if module_type is None:
        return None

    name = below_container[-2]
    namespace = name.split("-", 1)[0] if "-" in name else name
    return ModulePath(
        name=name,
        src_path="/".join(parts),
        namespace=namespace,
        group=namespace,
        type=module_type,
    )


def scan_base(root: Path, container: str = DEFAULT_CONTAINER) -> Path:
    """Directory that module source paths are made relative to.

    This is the parent of the nearest ``container`` directory at or above
    ``root``, so a root inside the container still yields paths that start
    with the container segment. Falls back to ``root`` itself.
    """
    for candidate in (root, *root.parents):
        if candidate.name == container:
            return candidate.parent
    return root


class PathClassifier:
    """Walks a source tree and classifies module-type directories."""

    def __init__(self, container: str = DEFAULT_CONTAINER) -> None:
        self.container = container

    def classify(self, root: str | os.PathLike[str]) -> List[ModulePath]:
        """Return every module path below ``root`` in walk order."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.is_dir():
            _logger.debug("Skipping classification, %s is not a directory", root_path)
            return []

        base = scan_base(root_path, self.container)
        results: List[ModulePath] = []
        for directory in self._iter_directories(root_path):
            rel_path = PurePosixPath(directory.relative_to(base).as_posix())
            if not is_valid_module_path(rel_path, self.container):
                continue
            module = parse_module_path(rel_path, self.container)
            if module is not None:
                results.append(module)
        _logger.debug("Classified %d module paths under %s", len(results), root_path)
        return results

    @staticmethod
    def _iter_directories(root: Path) -> Iterator[Path]:
        for dirpath, dirnames, _ in os.walk(root):
            dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
            current = Path(dirpath)
            if current != root:
                yield current


__all__ = [
    "PathClassifier",
    "is_valid_module_path",
    "parse_module_path",
    "scan_base",
]
