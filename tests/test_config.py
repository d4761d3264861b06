"""Tests for instrdocs.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from instrdocs.config import (
    DEFAULT_CONTAINER,
    DEFAULT_SOURCE_ID,
    ConfigError,
    InstrDocsConfig,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, InstrDocsConfig)
    assert config.root == tmp_path.resolve()
    assert config.scan.container == DEFAULT_CONTAINER
    assert config.scan.workers == 1
    assert config.scan.experimental_config is None
    assert config.scan_root == tmp_path.resolve() / "instrumentation"
    assert config.publish.docs_root is None
    assert config.publish.source_id == DEFAULT_SOURCE_ID
    assert [target.component for target in config.publish.targets] == [
        "supported-libraries",
        "disable-list",
    ]


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text(
        """
scan:
  root: "src/instrumentation"
  workers: 4
  experimental_config: "api/ExperimentalConfig.java"
publish:
  docs_root: "../docs"
  source_id: "my-source"
  version: "v2.3.0"
  targets:
    - path: "content/libraries.md"
      component: "libraries"
      renderer: "libraries-table"
      source: "docs/supported-libraries.md"
    - path: "content/disable.md"
      component: "disable-list"
      renderer: "disable-list"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)
    root = tmp_path.resolve()

    assert config.scan.root == root / "src" / "instrumentation"
    assert config.scan_root == root / "src" / "instrumentation"
    assert config.scan.workers == 4
    assert config.scan.experimental_config == root / "api" / "ExperimentalConfig.java"
    assert config.publish.docs_root == (root / ".." / "docs").resolve()
    assert config.publish.source_id == "my-source"
    assert config.publish.version == "v2.3.0"
    first, second = config.publish.targets
    assert first.renderer == "libraries-table"
    assert first.source == root / "docs" / "supported-libraries.md"
    assert second.source is None


def test_load_config_accepts_config_file_path(tmp_path: Path) -> None:
    config_file = tmp_path / ".instrdocs.yml"
    config_file.write_text("scan:\n  container: modules\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.scan.container == "modules"
    assert config.scan_root == tmp_path.resolve() / "modules"


def test_explicit_empty_targets_disable_defaults(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text("publish:\n  targets: []\n", encoding="utf-8")

    assert load_config(tmp_path).publish.targets == []


def test_invalid_worker_count_falls_back_to_one(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text("scan:\n  workers: lots\n", encoding="utf-8")

    assert load_config(tmp_path).scan.workers == 1


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).publish.version is None


def test_malformed_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text("scan: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_incomplete_target_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".instrdocs.yml").write_text(
        "publish:\n  targets:\n    - path: a.md\n      component: a\n", encoding="utf-8"
    )

    with pytest.raises(ConfigError, match="publish.targets\\[0\\]"):
        load_config(tmp_path)
