from __future__ import annotations

from typing import List, Optional, Sequence, Set

from instrdocs.models import EntityMetadata, InstrumentationEntity, ModuleType
from instrdocs.renderers import build_renderers
from instrdocs.renderers.supported_libraries import HEADER, SEPARATOR, SupportedLibrariesRenderer


def _entity(
    name: str,
    namespace: str,
    *,
    metadata: Optional[EntityMetadata] = None,
    types: Sequence[ModuleType] = (ModuleType.JAVAAGENT,),
    versions: Optional[Set[str]] = None,
) -> InstrumentationEntity:
    entity = InstrumentationEntity(
        src_path=f"instrumentation/{namespace}/{name}",
        name=name,
        namespace=namespace,
        group=namespace,
        metadata=metadata,
    )
    for module_type in types:
        entity.add_type(module_type)
    if versions:
        entity.add_target_versions(ModuleType.JAVAAGENT, versions)
    return entity


def _sample() -> List[InstrumentationEntity]:
    return [
        _entity(
            "okhttp-3.0",
            "okhttp",
            metadata=EntityMetadata(),
            types=[ModuleType.JAVAAGENT, ModuleType.LIBRARY],
            versions={"com.squareup.okhttp3:okhttp:[3.0,)"},
        ),
        _entity(
            "akka-http-10.0",
            "akka",
            metadata=EntityMetadata(
                display_name="Akka HTTP",
                library_link="https://akka.io",
                semantic_conventions=["HTTP_SERVER_SPANS", "HTTP_SERVER_METRICS"],
            ),
            versions={
                "com.typesafe.akka:akka-http_2.13:[10.1,)",
                "com.typesafe.akka:akka-http_2.12:[10.0,)",
            },
        ),
        _entity("zio-2.0", "zio", versions={"dev.zio:zio_2.13:[2.0.0,)"}),
        _entity("akka-actor-2.3", "akka", metadata=EntityMetadata()),
    ]


def test_renders_documented_entities_in_family_order() -> None:
    output = SupportedLibrariesRenderer("v2.0.0").render(_sample())

    assert output == "\n".join(
        [
            HEADER,
            SEPARATOR,
            "| akka-actor-2.3 | N/A | N/A | none |",
            "| [Akka HTTP](https://akka.io) | 10.0+<br>10.1+ | N/A | "
            "[HTTP Server Spans], [HTTP Server Metrics] |",
            "| okhttp-3.0 | 3.0+ | "
            "[opentelemetry-okhttp](../okhttp/okhttp-3.0/library) | none |",
            "",
            "_Auto-generated for version v2.0.0_",
            "",
        ]
    )


def test_entities_without_metadata_are_left_out() -> None:
    output = SupportedLibrariesRenderer("latest").render([_entity("zio-2.0", "zio")])

    assert output == f"{HEADER}\n{SEPARATOR}\n\n_Auto-generated for version latest_\n"


def test_app_server_table() -> None:
    entities = [
        _entity(
            "tomcat-10.0",
            "tomcat",
            metadata=EntityMetadata(display_name="Tomcat"),
            versions={"org.apache.tomcat.embed:tomcat-embed-core:[10.0,)"},
        ),
        _entity("jetty-11.0", "jetty", versions={"org.eclipse.jetty:jetty-server:[11,)"}),
        _entity("okhttp-3.0", "okhttp", metadata=EntityMetadata()),
    ]

    output = SupportedLibrariesRenderer("v1").render_app_servers(entities)

    assert output == (
        "| Application Server | Versions |\n"
        "|--------------------|----------|\n"
        "| Tomcat | 10.0+ |\n"
        "\n"
        "_Auto-generated for version v1_\n"
    )


def test_app_server_table_without_servers() -> None:
    renderers = build_renderers("v1")

    assert renderers["app-servers"]([]) == "No application servers documented.\n"
    assert sorted(renderers) == ["app-servers", "disable-list", "supported-libraries"]


def test_library_link_is_relative_to_the_instrumentation_directory() -> None:
    grpc = InstrumentationEntity(
        src_path="instrumentation/grpc-1.6",
        name="grpc-1.6",
        namespace="grpc",
        group="grpc",
        metadata=EntityMetadata(),
    )
    grpc.add_type(ModuleType.LIBRARY)
    spring = _entity(
        "spring-webmvc-5.3", "spring", metadata=EntityMetadata(), types=[ModuleType.LIBRARY]
    )

    output = SupportedLibrariesRenderer("latest").render([grpc, spring])

    assert "| grpc-1.6 | N/A | [opentelemetry-grpc-1.6](../grpc-1.6/library) | none |" in output
    assert (
        "| spring-webmvc-5.3 | N/A | "
        "[opentelemetry-spring](../spring/spring-webmvc-5.3/library) | none |"
    ) in output
