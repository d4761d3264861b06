"""Tests for the YAML instrumentation listing."""

from __future__ import annotations

import io

import yaml

from instrdocs.listing import build_listing, dump_listing
from instrdocs.models import (
    ConfigurationProperty,
    EmittedTelemetry,
    EntityMetadata,
    InstrumentationEntity,
    ModuleType,
)


def _entity(name: str, group: str) -> InstrumentationEntity:
    return InstrumentationEntity(
        src_path=f"instrumentation/{group}/{name}", name=name, namespace=group, group=group
    )


def test_listing_groups_and_sorts_entities() -> None:
    entities = [_entity("zio-2.0", "zio"), _entity("akka-http-10.0", "akka"), _entity("akka-actor-2.3", "akka")]

    listing = build_listing(entities)

    assert list(listing) == ["akka", "zio"]
    assert [entry["name"] for entry in listing["akka"]["instrumentations"]] == [
        "akka-actor-2.3",
        "akka-http-10.0",
    ]


def test_entry_carries_facts_in_order() -> None:
    entity = _entity("okhttp-3.0", "okhttp")
    entity.add_type(ModuleType.JAVAAGENT)
    entity.add_type(ModuleType.LIBRARY)
    entity.add_target_versions(ModuleType.LIBRARY, {"com.squareup.okhttp3:okhttp:3.0.0"})
    entity.add_target_versions(
        ModuleType.JAVAAGENT,
        {"com.squareup.okhttp3:okhttp:[3.0,)", "com.squareup.okhttp3:okhttp:[2.2,3)"},
    )
    entity.record_min_java_version(11)
    entity.add_capabilities(semantic_conventions={"http_client_attributes"}, span_types={"CLIENT"})
    entity.add_configuration(
        ConfigurationProperty(name="otel.instrumentation.okhttp.experimental", type="boolean", default="false")
    )
    entity.metadata = EntityMetadata(description="OkHttp client", disabled_by_default=True)
    entity.telemetry = EmittedTelemetry(
        scope={"name": "okhttp"},
        metrics=[{"name": "http.client.request.duration"}],
        span_kinds=["CLIENT"],
        span_attributes=[{"name": "server.port", "type": "LONG"}],
    )

    entry = build_listing([entity])["okhttp"]["instrumentations"][0]

    assert list(entry) == [
        "name",
        "namespace",
        "description",
        "disabled_by_default",
        "srcPath",
        "types",
        "minimum_java_version",
        "semantic_conventions",
        "span_types",
        "target_versions",
        "configurations",
        "scope",
        "metrics",
        "span_data",
    ]
    assert entry["types"] == ["javaagent", "library"]
    assert entry["target_versions"] == {
        "javaagent": ["com.squareup.okhttp3:okhttp:[2.2,3)", "com.squareup.okhttp3:okhttp:[3.0,)"],
        "library": ["com.squareup.okhttp3:okhttp:3.0.0"],
    }
    assert entry["configurations"] == [
        {"name": "otel.instrumentation.okhttp.experimental", "type": "boolean", "default": "false"}
    ]
    assert entry["span_data"] == {
        "span_kinds": ["CLIENT"],
        "attributes": [{"name": "server.port", "type": "LONG"}],
    }


def test_minimal_entry_omits_optional_keys() -> None:
    entity = _entity("oshi", "oshi")
    entity.add_type(ModuleType.JAVAAGENT)

    entry = build_listing([entity])["oshi"]["instrumentations"][0]

    assert entry == {
        "name": "oshi",
        "namespace": "oshi",
        "srcPath": "instrumentation/oshi/oshi",
        "types": ["javaagent"],
        "target_versions": {},
    }


def test_dump_listing_writes_parseable_yaml() -> None:
    entity = _entity("oshi", "oshi")
    entity.add_type(ModuleType.JAVAAGENT)
    entity.add_target_versions(ModuleType.JAVAAGENT, {"Java 8+"})
    buffer = io.StringIO()

    dump_listing([entity], buffer)

    text = buffer.getvalue()
    assert text.startswith("oshi:\n  instrumentations:\n")
    assert yaml.safe_load(text) == build_listing([entity])
