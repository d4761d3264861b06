"""Shared formatting helpers for rendered documentation fragments."""

from __future__ import annotations

import re
from typing import Dict, FrozenSet

_OPEN_RANGE_RE = re.compile(r"^\[([^,\[\]()]+),\s*\)$")
_BOUNDED_RANGE_RE = re.compile(r"^\[([^,\[\]()]+),([^,\[\]()]+)\)$")

CATEGORY_ACRONYMS: FrozenSet[str] = frozenset(
    {"HTTP", "RPC", "JVM", "GRPC", "DNS", "DB", "SQL", "URL"}
)

CATEGORY_NAMES: Dict[str, str] = {
    "DATABASE_CLIENT_METRICS": "Database Client Metrics",
    "DATABASE_CLIENT_SPANS": "Database Client Spans",
    "DATABASE_POOL_METRICS": "Database Pool Metrics",
    "GENAI_CLIENT_METRICS": "GenAI Client Metrics",
    "GENAI_CLIENT_SPANS": "GenAI Client Spans",
    "GRAPHQL_SERVER_SPANS": "GraphQL Server Spans",
    "FAAS_SERVER_SPANS": "FaaS Server Spans",
    "JVM_RUNTIME_METRICS": "JVM Runtime Metrics",
}

NAME_ACRONYMS: FrozenSet[str] = frozenset(
    {
        "http", "https", "grpc", "rpc", "jms", "jdbc", "jmx", "aws", "sql",
        "xml", "json", "api", "sdk", "jvm", "jsp", "rmi", "url", "uri", "tcp",
        "udp", "dns", "ssl", "tls", "oauth", "jwt", "uuid",
    }
)

DISPLAY_NAMES: Dict[str, str] = {
    "akka-actor": "Akka Actor",
    "akka-http": "Akka HTTP",
    "apache-dbcp": "Apache DBCP",
    "apache-dubbo": "Apache Dubbo",
    "apache-httpasyncclient": "Apache HttpAsyncClient",
    "apache-httpclient": "Apache HttpClient",
    "apache-shenyu": "Apache ShenYu",
    "async-http-client": "AsyncHttpClient (AHC)",
    "avaje-jex": "Avaje Jex",
    "aws-lambda": "AWS Lambda",
    "aws-sdk": "AWS SDK",
    "azure-core": "Azure SDK",
    "c3p0": "C3P0",
    "dropwizard-metrics": "Dropwizard Metrics",
    "dropwizard-views": "Dropwizard Views",
    "elasticsearch-api-client": "Elasticsearch API client",
    "elasticsearch-rest": "Elasticsearch REST client",
    "elasticsearch-transport": "Elasticsearch client",
    "executors": "java.util.concurrent",
    "external-annotations": "Additional tracing annotations",
    "google-http-client": "Google HTTP client",
    "grpc": "GRPC",
    "gwt": "Google Web Toolkit",
    "hikaricp": "HikariCP",
    "http-url-connection": "Java `HttpURLConnection`",
    "java-http-client": "Java HTTP Client",
    "java-http-server": "Java HTTP Server",
    "java-util-logging": "java.util.logging",
    "jaxrs": "JAX-RS (Server)",
    "jaxrs-client": "JAX-RS (Client)",
    "jaxws": "JAX-WS",
    "jboss-logmanager-appender": "JBoss Logging Appender",
    "jboss-logmanager-mdc": "JBoss Logging MDC",
    "jdbc": "Java JDBC",
    "jdbc-datasource": "Java JDBC `DataSource`",
    "jetty-httpclient": "Eclipse Jetty HTTP Client",
    "jms": "JMS",
    "jsf-mojarra": "Eclipse Mojarra",
    "jsf-myfaces": "Apache MyFaces",
    "jsp": "JSP",
    "kotlinx-coroutines": "kotlinx.coroutines",
    "ktor": "Ktor",
    "kubernetes-client": "K8s Client",
    "log4j-appender": "Log4j Appender",
    "log4j-context-data": "Log4j Context Data (2.x)",
    "log4j-mdc": "Log4j MDC (1.x)",
    "logback-appender": "Logback Appender",
    "logback-mdc": "Logback MDC",
    "methods": "Additional methods tracing",
    "mongo": "MongoDB",
    "mybatis": "MyBatis",
    "nats": "NATS Client",
    "okhttp": "OkHttp",
    "openai": "OpenAI",
    "opensearch-java": "OpenSearch Java",
    "opensearch-rest": "OpenSearch REST",
    "opentelemetry-api": "OpenTelemetry API",
    "opentelemetry-extension-annotations": "OpenTelemetry Extension Annotations",
    "opentelemetry-instrumentation-annotations": "OpenTelemetry Instrumentation Annotations",
    "oracle-ucp": "Oracle UCP",
    "oshi": "OSHI (Operating System and Hardware Information)",
    "pekko-actor": "Apache Pekko Actor",
    "pekko-http": "Apache Pekko HTTP",
    "play-ws": "Play WS HTTP Client",
    "r2dbc": "R2DBC",
    "rabbitmq": "RabbitMQ Client",
    "reactor-kafka": "Reactor Kafka",
    "reactor-netty": "Reactor Netty",
    "rediscala": "Rediscala",
    "rmi": "Java RMI",
    "rocketmq-client": "Apache RocketMQ",
    "runtime-telemetry": "Java Runtime",
    "rxjava": "ReactiveX RxJava",
    "scala-fork-join": "Scala ForkJoinPool",
    "servlet": "Java Servlet",
    "spring-boot-actuator-autoconfigure": "Spring Boot Actuator Autoconfigure",
    "spring-cloud-aws": "Spring Cloud AWS",
    "spring-cloud-gateway": "Spring Cloud Gateway",
    "spring-core": "Spring Core",
    "spring-data": "Spring Data",
    "spring-integration": "Spring Integration",
    "spring-jms": "Spring JMS",
    "spring-kafka": "Spring Kafka",
    "spring-pulsar": "Spring Pulsar",
    "spring-rabbit": "Spring RabbitMQ",
    "spring-rmi": "Spring RMI",
    "spring-scheduling": "Spring Scheduling",
    "spring-security-config": "Spring Security Config",
    "spring-web": "Spring Web",
    "spring-webflux": "Spring WebFlux",
    "spring-webmvc": "Spring Web MVC",
    "spring-ws": "Spring Web Services",
    "tomcat-jdbc": "Tomcat JDBC",
    "twilio": "Twilio SDK",
    "vertx-http-client": "Eclipse Vert.x HttpClient",
    "vertx-kafka-client": "Eclipse Vert.x Kafka Client",
    "vertx-redis-client": "Eclipse Vert.x Redis Client",
    "vertx-rx-java": "Eclipse Vert.x RxJava",
    "vertx-sql-client": "Eclipse Vert.x SQL Client",
    "vertx-web": "Eclipse Vert.x Web",
    "vibur-dbcp": "Vibur DBCP",
    "xxl-job": "XXL-JOB",
    "zio": "ZIO",
}


def library_family(name: str) -> str:
    """Token before the first ``-`` of a module name."""
    head, _, _ = name.partition("-")
    return head or name


def format_version_range(constraint: str) -> str:
    """Render a version constraint in short human form.

    ``[2.0,)`` becomes ``2.0+`` and ``[2.0,3.0)`` becomes ``2.0 - 3.0``. A
    leading ``group:artifact:`` coordinate is dropped first; anything that is
    not a half-open range is returned as is.
    """
    version = constraint
    parts = constraint.split(":")
    if len(parts) >= 3:
        version = parts[-1]

    match = _OPEN_RANGE_RE.match(version)
    if match:
        return f"{match.group(1).strip()}+"
    match = _BOUNDED_RANGE_RE.match(version)
    if match:
        return f"{match.group(1).strip()} - {match.group(2).strip()}"
    return version


def _title_words(identifier: str, keep_upper: FrozenSet[str], *, upper_input: bool) -> str:
    words = [word for word in re.split(r"[-_]", identifier) if word]
    rendered = []
    for word in words:
        probe = word.upper() if upper_input else word.lower()
        if probe in keep_upper:
            rendered.append(word.upper())
        else:
            rendered.append(word[:1].upper() + word[1:].lower())
    return " ".join(rendered)


def format_category(identifier: str) -> str:
    """Display name for a semantic-convention category such as ``HTTP_SERVER_SPANS``."""
    known = CATEGORY_NAMES.get(identifier.upper())
    if known:
        return known
    return _title_words(identifier, CATEGORY_ACRONYMS, upper_input=True)


def display_name(instrumentation_name: str) -> str:
    """Display name for an instrumentation such as ``akka-actor``."""
    known = DISPLAY_NAMES.get(instrumentation_name)
    if known:
        return known
    return _title_words(instrumentation_name, NAME_ACRONYMS, upper_input=False)


__all__ = [
    "display_name",
    "format_category",
    "format_version_range",
    "library_family",
]
