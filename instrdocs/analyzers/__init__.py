"""Analyzers that extract facts from module descriptors and sources."""

from __future__ import annotations

from .base import Analyzer
from .configuration import ConfigurationScanner, extract_config_accessors, parse_config_properties
from .dependencies import DependencyResolver
from .markers import SEMCONV_MARKERS, SPAN_TYPE_MARKERS, scan_for_markers
from .sources import SourceFactScanner

__all__ = [
    "Analyzer",
    "ConfigurationScanner",
    "DependencyResolver",
    "SEMCONV_MARKERS",
    "SPAN_TYPE_MARKERS",
    "SourceFactScanner",
    "extract_config_accessors",
    "parse_config_properties",
    "scan_for_markers",
]
