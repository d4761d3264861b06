"""CLI entrypoints for instrdocs commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, InstrDocsConfig, load_config
from .listing import dump_listing
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the source repository root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="instrdocs",
        description="Extract instrumentation metadata and publish it into documentation pages.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report warnings and errors.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser(
        "list",
        help="Write the instrumentation listing as YAML.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_path_argument(list_parser)
    list_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write the listing to this file instead of stdout.",
    )

    publish_parser = subparsers.add_parser(
        "publish",
        help="Update generated regions in the documentation repository.",
    )
    _add_verbose_option(publish_parser, suppress_default=True)
    _add_path_argument(publish_parser)
    publish_parser.add_argument(
        "--docs-root",
        type=Path,
        help="Root of the documentation repository (overrides publish.docs_root).",
    )
    publish_parser.add_argument(
        "--version",
        dest="doc_version",
        help="Version label for generated content (defaults to version.gradle.kts).",
    )
    publish_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report changes without writing target documents.",
    )

    return parser


def _load(parser: argparse.ArgumentParser, path: str) -> InstrDocsConfig:
    try:
        return load_config(Path(path))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for instrdocs commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    config = _load(parser, args.path)
    orchestrator = Orchestrator()

    if args.command == "list":
        try:
            entities = orchestrator.run_list(config)
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            with open(args.output, "w", encoding="utf-8") as handle:
                dump_listing(entities, handle)
            print(f"Listing written to {_relativize(args.output)}")
        else:
            dump_listing(entities, sys.stdout)
        return 0

    if args.command == "publish":
        if args.docs_root is not None:
            config.publish.docs_root = args.docs_root.expanduser().resolve()
        if args.doc_version:
            config.publish.version = args.doc_version
        try:
            report = orchestrator.run_publish(config, dry_run=bool(args.dry_run))
        except FileNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        for outcome in report.outcomes:
            status = "failed" if not outcome.result.success else (
                "updated" if outcome.result.changed else "unchanged"
            )
            print(f"{outcome.target.component}: {status} ({_relativize(outcome.path)})")
        if report.exit_code:
            parser.exit(report.exit_code, "instrdocs publish failed for every target\n")
        return 0

    parser.exit(1, "Unknown command\n")  # pragma: no cover - argparse enforces choices


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
