"""Base classes for entity analyzers."""

from abc import ABC, abstractmethod

from ..file_search import FileManager
from ..models import InstrumentationEntity


class Analyzer(ABC):
    """Contract for analyzers that add facts to an aggregated entity."""

    name: str = "analyzer"

    @abstractmethod
    def supports(self, entity: InstrumentationEntity) -> bool:
        """Return True when this analyzer should run for the entity."""

    @abstractmethod
    def analyze(self, entity: InstrumentationEntity, files: FileManager) -> None:
        """Merge extracted facts into ``entity`` in place."""
