"""Re-publishing of a hand-maintained supported libraries table."""

from __future__ import annotations

import re
from typing import List

MAVEN_CENTRAL_BASE = "https://central.sonatype.com/artifact/io.opentelemetry.instrumentation/"
SEMCONV_GITHUB_BASE = "https://github.com/open-telemetry/semantic-conventions/blob/main/docs/"
SEMCONV_SITE_BASE = "/docs/specs/semconv/"

STANDALONE_FOOTNOTE = (
    "[1]: Standalone library instrumentations are published as separate artifacts "
    "and can be used without the Java agent."
)

_LINK_RE = re.compile(r"\[([^\]]+)\]\(\.\./(instrumentation/[^)]+)\)")
_LINK_DEFINITION_RE = re.compile(r"^\[[^\]]+\]:\s+https?://.*")


def transform_links(line: str) -> str:
    """Point relative module links at the published Maven Central artifact."""
    return _LINK_RE.sub(lambda match: f"[{match.group(1)}]({MAVEN_CENTRAL_BASE}{match.group(1)})", line)


def transform_link_definition(line: str) -> str:
    transformed = line.replace(SEMCONV_GITHUB_BASE, SEMCONV_SITE_BASE, 1)
    return transformed.replace(".md#", "/#").replace(".md", "/")


def _is_table_header(line: str) -> bool:
    return line.startswith("| Library/Framework")


class SupportedLibrariesTableParser:
    """Extracts the supported libraries table and rewrites it for the docs site."""

    def parse_and_transform(self, text: str) -> str:
        output: List[str] = []
        definitions: List[str] = []
        in_table = False
        header_done = False
        table_ended = False

        for line in text.splitlines():
            if _LINK_DEFINITION_RE.match(line):
                definitions.append(transform_link_definition(line))
                continue
            if table_ended:
                continue

            if not in_table:
                if _is_table_header(line) and "Semantic Conventions" in line:
                    if "Functionality / Semantic Conventions" not in line:
                        line = line.replace(
                            "Semantic Conventions", "Functionality / Semantic Conventions"
                        )
                    output.append(line)
                    in_table = True
                continue

            if not header_done:
                if line.startswith("|---") or line.startswith("| ---"):
                    output.append(line)
                    header_done = True
                continue

            if line.startswith("|") and line.strip() != "|":
                output.append(transform_links(line))
            else:
                in_table = False
                table_ended = True

        result = "\n".join(output) + "\n" if output else ""
        result += "\n" + STANDALONE_FOOTNOTE + "\n"
        if definitions:
            result += "\n" + "\n".join(definitions) + "\n"
        return result


__all__ = [
    "MAVEN_CENTRAL_BASE",
    "SupportedLibrariesTableParser",
    "transform_link_definition",
    "transform_links",
]
