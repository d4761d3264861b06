"""Shared text-matching helpers for the analyzer implementations."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

Range = Tuple[int, int]

# Gradle descriptor helpers

_VARIABLE_RE = re.compile(r'^\s*(?:(?:val|var|def)\s+)?(\w+)\s*=\s*"([^"]+)"', re.MULTILINE)
_IF_RE = re.compile(r"\bif\s*\(")
_TESTING_RE = re.compile(r"\btesting\s*\{")
_OTEL_JAVA_RE = re.compile(r"\botelJava\s*\{")
_MIN_JAVA_RE = re.compile(r"minJavaVersionSupported\.set\(\s*JavaVersion\.VERSION_(\d+)\s*\)")

_TEST_ARTIFACT_MARKERS = ("starter-test", "test-support")
_TEST_ARTIFACT_NAMES = (":junit", ":mockito", ":assertj", ":hamcrest")


def find_balanced(text: str, open_index: int, opening: str = "{", closing: str = "}") -> int:
    """Return the index just past the bracket matching ``text[open_index]``.

    Brackets inside string literals and comments are not counted. Returns
    ``len(text)`` when the bracket is never closed so callers treat the rest
    of the file as the body.
    """
    depth = 0
    index = open_index
    while index < len(text):
        skipped = _skip_literal(text, index)
        if skipped != index:
            index = skipped
            continue
        char = text[index]
        if char == opening:
            depth += 1
        elif char == closing:
            depth -= 1
            if depth == 0:
                return index + 1
        index += 1
    return len(text)


def _skip_literal(text: str, index: int) -> int:
    """Index just past a string or comment starting at ``index``, else ``index``."""
    if text.startswith('"""', index):
        end = text.find('"""', index + 3)
        return len(text) if end == -1 else end + 3
    if text[index] == '"':
        cursor = index + 1
        while cursor < len(text) and text[cursor] not in '"\n':
            cursor += 2 if text[cursor] == "\\" else 1
        return min(cursor + 1, len(text))
    if text.startswith("//", index):
        end = text.find("\n", index)
        return len(text) if end == -1 else end
    if text.startswith("/*", index):
        end = text.find("*/", index + 2)
        return len(text) if end == -1 else end + 2
    return index


def block_bodies(text: str, header: re.Pattern[str]) -> List[Tuple[int, int, str]]:
    """Return ``(start, end, body)`` for every ``header {`` block in ``text``.

    ``header`` must end on the opening brace. Nested blocks of the same
    header are returned as separate entries.
    """
    blocks: List[Tuple[int, int, str]] = []
    for match in header.finditer(text):
        open_index = match.end() - 1
        end = find_balanced(text, open_index)
        blocks.append((match.start(), end, text[open_index + 1 : end - 1]))
    return blocks


def exclusion_ranges(text: str) -> List[Range]:
    """Spans of conditional and test-suite blocks that must not contribute facts."""
    ranges: List[Range] = []
    for match in _IF_RE.finditer(text):
        paren_end = find_balanced(text, match.end() - 1, "(", ")")
        cursor = paren_end
        while cursor < len(text) and text[cursor].isspace():
            cursor += 1
        if cursor < len(text) and text[cursor] == "{":
            ranges.append((match.start(), find_balanced(text, cursor)))
    for start, end, _ in block_bodies(text, _TESTING_RE):
        ranges.append((start, end))
    return ranges


def in_ranges(position: int, ranges: Sequence[Range]) -> bool:
    return any(start <= position <= end for start, end in ranges)


def extract_variables(text: str) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    for match in _VARIABLE_RE.finditer(text):
        variables[match.group(1)] = match.group(2)
    return variables


def interpolate(text: str, variables: Dict[str, str]) -> str:
    """Substitute ``$name`` and ``${name}`` references, longest names first."""
    for name in sorted(variables, key=len, reverse=True):
        value = variables[name]
        text = text.replace("${" + name + "}", value).replace("$" + name, value)
    return text


def parse_min_java_version(
    text: str, ranges: Optional[Sequence[Range]] = None
) -> Optional[int]:
    """Minimum platform version declared by the first unconditional ``otelJava`` block."""
    if ranges is None:
        ranges = exclusion_ranges(text)
    for start, _, body in block_bodies(text, _OTEL_JAVA_RE):
        if in_ranges(start, ranges):
            continue
        match = _MIN_JAVA_RE.search(body)
        if match:
            return int(match.group(1))
    return None


def is_test_artifact(coordinate: str) -> bool:
    lowered = coordinate.lower()
    if lowered.endswith(("-test", "-testing")):
        return True
    if any(marker in lowered for marker in _TEST_ARTIFACT_MARKERS):
        return True
    return any(name in lowered for name in _TEST_ARTIFACT_NAMES)


# Java source helpers


def method_bodies(text: str, header: re.Pattern[str]) -> List[Tuple[str, str]]:
    """Return ``(method_name, body)`` for every header match, bodies brace-balanced.

    ``header`` must capture the method name in group 1 and end on ``{``.
    """
    methods: List[Tuple[str, str]] = []
    for start, end, body in block_bodies(text, header):
        match = header.match(text, start)
        if match:
            methods.append((match.group(1), body))
    return methods


__all__ = [
    "block_bodies",
    "exclusion_ranges",
    "extract_variables",
    "find_balanced",
    "in_ranges",
    "interpolate",
    "is_test_artifact",
    "method_bodies",
    "parse_min_java_version",
]
