"""Managed marker utilities for generated documentation regions."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Tuple

from ..logging import get_logger
from ..models import UpdateResult

_logger = get_logger("postproc.markers")


class MarkerManager:
    """Replaces content between BEGIN/END-GENERATED comment pairs.

    A region is addressed by a component id and a source id. Only the first
    matching pair is replaced and nothing outside it is touched. Missing
    pairs are reported, never created.
    """

    BEGIN_FMT = "<!-- BEGIN-GENERATED: {component} {source} -->"
    END_FMT = "<!-- END-GENERATED: {component} {source} -->"

    def __init__(
        self, component_prefix: str = "COMPONENT:", source_prefix: str = "SOURCE:"
    ) -> None:
        self.component_prefix = component_prefix
        self.source_prefix = source_prefix

    def markers(self, component_id: str, source_id: str) -> Tuple[str, str]:
        component = f"{self.component_prefix}{component_id}"
        source = f"{self.source_prefix}{source_id}"
        return (
            self.BEGIN_FMT.format(component=component, source=source),
            self.END_FMT.format(component=component, source=source),
        )

    @staticmethod
    def not_found_message(component_id: str, source_id: str) -> str:
        return f"Markers not found for component '{component_id}' and source '{source_id}'"

    def _pattern(self, component_id: str, source_id: str) -> "re.Pattern[str]":
        begin, end = self.markers(component_id, source_id)
        return re.compile(re.escape(begin) + r".*?" + re.escape(end), re.DOTALL)

    def has_markers(self, document: str, component_id: str, source_id: str) -> bool:
        return self._pattern(component_id, source_id).search(document) is not None

    def replace(
        self, document: str, component_id: str, source_id: str, content: str
    ) -> UpdateResult:
        """Splice ``content`` between the first matching marker pair."""
        pattern = self._pattern(component_id, source_id)
        if pattern.search(document) is None:
            return UpdateResult.failed(self.not_found_message(component_id, source_id))
        begin, end = self.markers(component_id, source_id)
        block = f"{begin}\n{content.strip()}\n{end}"
        updated = pattern.sub(lambda _: block, document, count=1)
        return UpdateResult.succeeded(updated, changed=updated != document)

    def update_file(
        self,
        path: Path,
        component_id: str,
        source_id: str,
        content: str,
        *,
        dry_run: bool = False,
    ) -> UpdateResult:
        """Reconcile ``path`` in place, writing only when the document changed."""
        if not path.is_file():
            return UpdateResult.failed(f"Target document not found: {path}")
        with open(path, "r", encoding="utf-8", newline="") as handle:
            document = handle.read()
        result = self.replace(document, component_id, source_id, content)
        if result.success and result.changed and not dry_run:
            with open(path, "w", encoding="utf-8", newline="") as handle:
                handle.write(result.content or "")
            _logger.debug("Updated %s (%s)", path, component_id)
        return result

    def file_has_markers(self, path: Path, component_id: str, source_id: str) -> bool:
        if not path.is_file():
            return False
        with open(path, "r", encoding="utf-8", newline="") as handle:
            return self.has_markers(handle.read(), component_id, source_id)


__all__ = ["MarkerManager"]
