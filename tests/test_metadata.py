"""Tests for sidecar metadata and telemetry parsing."""

from __future__ import annotations

from instrdocs.file_search import FileManager
from instrdocs.metadata import MetadataAnalyzer, merge_telemetry, parse_metadata
from instrdocs.models import EmittedTelemetry, EntityMetadata, InstrumentationEntity
from tests._fixtures.repo_builder import RepoBuilder

MODULE = "instrumentation/okhttp/okhttp-3.0"


def test_parse_metadata_reads_all_keys() -> None:
    metadata = parse_metadata(
        "display_name: OkHttp\n"
        "library_link: https://square.github.io/okhttp/\n"
        "description: Instruments the OkHttp client.\n"
        "disabled_by_default: true\n"
        "classification: library\n"
        "semantic_conventions:\n"
        "  - HTTP_CLIENT_SPANS\n"
        "  - HTTP_CLIENT_METRICS\n"
    )

    assert metadata == EntityMetadata(
        display_name="OkHttp",
        library_link="https://square.github.io/okhttp/",
        description="Instruments the OkHttp client.",
        disabled_by_default=True,
        classification="library",
        semantic_conventions=["HTTP_CLIENT_SPANS", "HTTP_CLIENT_METRICS"],
    )


def test_parse_metadata_only_accepts_boolean_true_for_disabled() -> None:
    metadata = parse_metadata('disabled_by_default: "true"\n')

    assert metadata is not None
    assert metadata.disabled_by_default is False


def test_parse_metadata_empty_document_gives_defaults() -> None:
    assert parse_metadata("") == EntityMetadata()


def test_parse_metadata_rejects_malformed_documents() -> None:
    assert parse_metadata("description: [unclosed\n") is None
    assert parse_metadata("- just\n- a list\n") is None


def test_merge_telemetry_deduplicates_by_name() -> None:
    telemetry = EmittedTelemetry()

    merge_telemetry(telemetry, "scope", "scope:\n  name: io.opentelemetry.okhttp-3.0\n", "scope.yaml")
    merge_telemetry(
        telemetry,
        "metrics",
        "metrics:\n"
        "  - name: http.client.request.duration\n"
        "    type: HISTOGRAM\n"
        "  - name: http.client.request.duration\n"
        "    type: HISTOGRAM\n",
        "metrics-default.yaml",
    )
    merge_telemetry(
        telemetry,
        "spans",
        "spans:\n"
        "  - span_kind: CLIENT\n"
        "    attributes:\n"
        "      - name: http.request.method\n"
        "        type: STRING\n"
        "  - span_kind: CLIENT\n"
        "    attributes:\n"
        "      - name: http.request.method\n"
        "        type: STRING\n"
        "      - name: server.port\n"
        "        type: LONG\n",
        "spans-default.yaml",
    )

    assert telemetry.scope == {"name": "io.opentelemetry.okhttp-3.0"}
    assert [metric["name"] for metric in telemetry.metrics] == ["http.client.request.duration"]
    assert telemetry.span_kinds == ["CLIENT"]
    assert [attribute["name"] for attribute in telemetry.span_attributes] == [
        "http.request.method",
        "server.port",
    ]


def test_merge_telemetry_ignores_malformed_and_unknown_documents() -> None:
    telemetry = EmittedTelemetry()

    merge_telemetry(telemetry, "metrics", "metrics: [", "metrics-bad.yaml")
    merge_telemetry(telemetry, "metrics", "metrics: not-a-list\n", "metrics-odd.yaml")
    merge_telemetry(telemetry, "logs", "logs: []\n", "logs.yaml")

    assert telemetry.is_empty()


def test_metadata_analyzer_attaches_sidecar_and_telemetry(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            f"{MODULE}/metadata.yaml": "description: OkHttp client\n",
            f"{MODULE}/.telemetry/scope.yaml": "scope:\n  name: okhttp\n",
            f"{MODULE}/.telemetry/metrics-default.yaml": """
                metrics:
                  - name: http.client.request.duration
            """,
        }
    )
    entity = InstrumentationEntity(
        src_path=MODULE, name="okhttp-3.0", namespace="okhttp", group="okhttp"
    )

    MetadataAnalyzer().analyze(entity, FileManager(repo_builder.path()))

    assert entity.metadata is not None
    assert entity.metadata.description == "OkHttp client"
    assert entity.telemetry is not None
    assert entity.telemetry.scope == {"name": "okhttp"}
    assert len(entity.telemetry.metrics) == 1


def test_metadata_analyzer_leaves_entity_untouched_without_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write({f"{MODULE}/metadata.yaml": "description: [broken\n"})
    entity = InstrumentationEntity(
        src_path=MODULE, name="okhttp-3.0", namespace="okhttp", group="okhttp"
    )

    MetadataAnalyzer().analyze(entity, FileManager(repo_builder.path()))

    assert entity.metadata is None
    assert entity.telemetry is None
