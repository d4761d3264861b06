"""Aggregation of classified module paths into instrumentation entities."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .analyzers.base import Analyzer
from .analyzers.dependencies import DependencyResolver
from .analyzers.sources import SourceFactScanner
from .file_search import FileManager
from .logging import get_logger
from .metadata import MetadataAnalyzer
from .models import InstrumentationEntity, ModulePath
from .path_classifier import PathClassifier, scan_base

_logger = get_logger("aggregator")


def _strip_type_segment(module: ModulePath) -> str:
    parts = module.src_path.split("/")
    if parts and parts[-1] == module.type.value:
        parts = parts[:-1]
    return "/".join(parts)


def sort_entities(entities: Iterable[InstrumentationEntity]) -> List[InstrumentationEntity]:
    return sorted(entities, key=lambda entity: (entity.group, entity.name))


def aggregate(module_paths: Iterable[ModulePath]) -> List[InstrumentationEntity]:
    """Merge module paths sharing a ``(group, namespace, name)`` key.

    Types keep the order in which they were first seen for each key.
    """
    entities: Dict[Tuple[str, str, str], InstrumentationEntity] = {}
    for module in module_paths:
        entity = entities.get(module.key)
        if entity is None:
            entity = InstrumentationEntity(
                src_path=_strip_type_segment(module),
                name=module.name,
                namespace=module.namespace,
                group=module.group,
            )
            entities[module.key] = entity
        entity.add_type(module.type)
    return sort_entities(entities.values())


def enrich(
    entity: InstrumentationEntity,
    resolver: Analyzer,
    scanner: Analyzer,
    file_manager: FileManager,
    metadata: Optional[Analyzer] = None,
) -> InstrumentationEntity:
    """Run each analyzer that supports ``entity`` against its module directory."""
    for analyzer in (resolver, scanner, metadata):
        if analyzer is None or not analyzer.supports(entity):
            continue
        analyzer.analyze(entity, file_manager)
    return entity


class InstrumentationAnalyzer:
    """Classifies a source tree and builds fully enriched entities."""

    def __init__(
        self,
        classifier: Optional[PathClassifier] = None,
        resolver: Optional[Analyzer] = None,
        scanner: Optional[Analyzer] = None,
        metadata: Optional[Analyzer] = None,
        workers: int = 1,
    ) -> None:
        self.classifier = classifier or PathClassifier()
        self.resolver = resolver or DependencyResolver()
        self.scanner = scanner or SourceFactScanner()
        self.metadata = metadata or MetadataAnalyzer()
        self.workers = max(1, workers)

    def analyze(self, root: Path) -> List[InstrumentationEntity]:
        root = Path(root).expanduser().resolve()
        if not root.is_dir():
            raise FileNotFoundError(f"Source root does not exist: {root}")

        module_paths = self.classifier.classify(root)
        entities = aggregate(module_paths)
        file_manager = FileManager(scan_base(root, self.classifier.container))
        _logger.info(
            "Found %d module paths forming %d entities", len(module_paths), len(entities)
        )
        self._enrich_all(entities, file_manager)
        return entities

    def _enrich_all(
        self, entities: Sequence[InstrumentationEntity], file_manager: FileManager
    ) -> None:
        def _run(entity: InstrumentationEntity) -> InstrumentationEntity:
            return enrich(entity, self.resolver, self.scanner, file_manager, self.metadata)

        if self.workers == 1 or len(entities) < 2:
            for entity in entities:
                _run(entity)
            return

        # one task per entity keeps every mutation of a key on a single thread
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            list(executor.map(_run, entities))


__all__ = ["InstrumentationAnalyzer", "aggregate", "enrich", "sort_entities"]
