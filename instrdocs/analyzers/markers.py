"""Literal marker detection across module source files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Mapping

from ..logging import get_logger

SEMCONV_MARKERS: Dict[str, str] = {
    "db_client_metrics": "DbClientMetrics.get()",
    "db_client_spans": "DbClientSpanNameExtractor",
    "network_attributes": "NetworkAttributesGetter",
    "rpc_attributes": "RpcAttributesGetter",
    "http_client_attributes": "HttpClientAttributesGetter",
    "http_server_attributes": "HttpServerAttributesGetter",
}

SPAN_TYPE_MARKERS: Dict[str, str] = {
    "CLIENT": "JavaagentHttpClientInstrumenters.create",
    "SERVER": "JavaagentHttpServerInstrumenters.create",
}

_logger = get_logger("analyzers.markers")


def scan_for_markers(files: Iterable[Path], table: Mapping[str, str]) -> Dict[str, Path]:
    """Map each tag in ``table`` to the first file containing its literal.

    Files are searched line by line in input order. Unreadable files are
    skipped.
    """
    found: Dict[str, Path] = {}
    for path in files:
        pending = {tag: needle for tag, needle in table.items() if tag not in found}
        if not pending:
            break
        try:
            with open(path, "r", encoding="utf-8") as handle:
                for line in handle:
                    for tag, needle in list(pending.items()):
                        if needle in line:
                            found[tag] = path
                            del pending[tag]
                    if not pending:
                        break
        except (OSError, UnicodeDecodeError) as exc:
            _logger.debug("Skipping unreadable file %s: %s", path, exc)
    return found


__all__ = ["SEMCONV_MARKERS", "SPAN_TYPE_MARKERS", "scan_for_markers"]
