"""Tests for instrdocs.file_search."""

from __future__ import annotations

from pathlib import Path

from instrdocs.file_search import FileManager, descriptor_type
from instrdocs.models import ModuleType
from tests._fixtures.repo_builder import RepoBuilder

MODULE = "instrumentation/okhttp/okhttp-3.0"


def _build_module(repo_builder: RepoBuilder) -> Path:
    repo_builder.write(
        {
            f"{MODULE}/javaagent/build.gradle.kts": "muzzle {}\n",
            f"{MODULE}/javaagent/src/main/java/Agent.java": "class Agent {}\n",
            f"{MODULE}/javaagent/src/test/java/AgentTest.java": "class AgentTest {}\n",
            f"{MODULE}/javaagent/build/generated/Gen.java": "class Gen {}\n",
            f"{MODULE}/library/build.gradle.kts": "dependencies {}\n",
            f"{MODULE}/library/src/main/java/Library.java": "class Library {}\n",
            f"{MODULE}/library/src/main/resources/notes.txt": "not java\n",
            f"{MODULE}/testing/build.gradle.kts": "dependencies {}\n",
            f"{MODULE}/metadata.yaml": "description: OkHttp client\n",
            f"{MODULE}/.telemetry/scope.yaml": "scope:\n  name: okhttp\n",
            f"{MODULE}/.telemetry/metrics-default.yaml": "metrics: []\n",
            f"{MODULE}/.telemetry/spans-default.yaml": "spans: []\n",
            f"{MODULE}/.telemetry/README.md": "ignored\n",
            f"{MODULE}/.config/config-1234.yaml": "instrumentation: {}\n",
            f"{MODULE}/.config/other.yaml": "ignored: true\n",
        }
    )
    return repo_builder.path() / MODULE


def test_source_files_skip_build_and_test_trees(repo_builder: RepoBuilder) -> None:
    module_dir = _build_module(repo_builder)
    files = FileManager(repo_builder.path())

    names = sorted(path.name for path in files.source_files(module_dir))

    assert names == ["Agent.java", "Library.java"]


def test_build_descriptors_skip_testing_subprojects(repo_builder: RepoBuilder) -> None:
    module_dir = _build_module(repo_builder)
    files = FileManager(repo_builder.path())

    descriptors = files.build_descriptors(module_dir)

    assert sorted(path.parent.name for path in descriptors) == ["javaagent", "library"]


def test_sidecar_and_telemetry_lookups(repo_builder: RepoBuilder) -> None:
    module_dir = _build_module(repo_builder)
    files = FileManager(repo_builder.path())

    assert files.metadata_file(module_dir) == "description: OkHttp client\n"

    telemetry = files.telemetry_files(module_dir)
    assert telemetry.scope is not None and telemetry.scope.name == "scope.yaml"
    assert [path.name for path in telemetry.metrics] == ["metrics-default.yaml"]
    assert [path.name for path in telemetry.spans] == ["spans-default.yaml"]

    assert [path.name for path in files.recorded_config_files(module_dir)] == ["config-1234.yaml"]


def test_missing_sidecar_and_telemetry_are_not_errors(tmp_path: Path) -> None:
    files = FileManager(tmp_path)
    module_dir = tmp_path / "instrumentation" / "none"

    assert files.metadata_file(module_dir) is None
    assert files.telemetry_files(module_dir).is_empty()
    assert files.recorded_config_files(module_dir) == []
    assert files.source_files(module_dir) == []


def test_read_text_returns_none_for_unreadable_file(tmp_path: Path) -> None:
    binary = tmp_path / "binary.java"
    binary.write_bytes(b"\xff\xfe\x00broken")

    files = FileManager(tmp_path)

    assert files.read_text(binary) is None
    assert files.read_text(tmp_path / "missing.java") is None


def test_descriptor_type_from_path_segments() -> None:
    assert descriptor_type("instrumentation/a/a-1.0/javaagent/build.gradle.kts") is ModuleType.JAVAAGENT
    assert descriptor_type("instrumentation/a/a-1.0/library/build.gradle.kts") is ModuleType.LIBRARY
    assert descriptor_type("instrumentation/a/a-1.0/testing/build.gradle.kts") is None
