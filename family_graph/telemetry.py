"""Telemetry setup for OpenTelemetry tracing.

Engine operations called through the server run inside spans named
``<component>.<operation>`` (for example ``tree.build`` or
``relatives.find``). When tracing is enabled, spans are exported over OTLP
HTTP to any OpenTelemetry collector (Arize Phoenix, Jaeger, ...).

Environment Variables:
    FAMILY_GRAPH_TRACING_ENABLED: Set to 'true' to enable tracing (default: false)
    FAMILY_GRAPH_OTLP_ENDPOINT: Collector URL (default: http://localhost:6006)
    FAMILY_GRAPH_SERVICE_NAME: Service name on exported spans (default: family-graph-server)
"""

import os
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

COMPONENT_ATTRIBUTE = "family_graph.component"

# Span name prefix -> engine component
COMPONENTS = {
    "index": "graph_index",
    "tree": "tree_builder",
    "stats": "stats_calculator",
    "relatives": "path_finder",
    "lineage": "lineage",
    "search": "search",
}


def is_tracing_enabled() -> bool:
    """Check if tracing is enabled via environment variable."""
    return os.getenv("FAMILY_GRAPH_TRACING_ENABLED", "false").lower() == "true"


def get_otlp_endpoint() -> str:
    """Get the OTLP collector endpoint."""
    return os.getenv("FAMILY_GRAPH_OTLP_ENDPOINT", "http://localhost:6006")


def get_service_name() -> str:
    """Get the service name reported on spans."""
    return os.getenv("FAMILY_GRAPH_SERVICE_NAME", "family-graph-server")


class ComponentSpanProcessor(SpanProcessor):
    """Span processor that tags each span with the engine component it belongs to.

    The span name prefix before the first dot is looked up in COMPONENTS
    (index, tree, stats, relatives, lineage, search); anything else is
    tagged as server.
    """

    def on_start(self, span: Any, parent_context: Any = None) -> None:
        """Called when a span starts. Sets the component attribute."""
        if not hasattr(span, "name") or not hasattr(span, "set_attribute"):
            return

        prefix = span.name.lower().split(".", 1)[0]
        span.set_attribute(COMPONENT_ATTRIBUTE, COMPONENTS.get(prefix, "server"))

    def on_end(self, span: ReadableSpan) -> None:
        """Called when a span ends. No-op for this processor."""
        pass

    def shutdown(self) -> None:
        """Shutdown the processor."""
        pass

    def force_flush(self, timeout_millis: int = 30000) -> bool:
        """Force flush any buffered spans."""
        return True


_tracer_provider: TracerProvider | None = None


def initialize_tracing() -> TracerProvider | None:
    """Initialize OpenTelemetry tracing.

    Sets up the OTLP exporter and the component span processor.

    Returns:
        TracerProvider if tracing is enabled, None otherwise.
    """
    global _tracer_provider

    if not is_tracing_enabled():
        return None

    if _tracer_provider is not None:
        return _tracer_provider

    exporter = OTLPSpanExporter(endpoint=f"{get_otlp_endpoint()}/v1/traces")

    _tracer_provider = TracerProvider(resource=Resource.create({"service.name": get_service_name()}))

    # Tag spans first, then export them
    _tracer_provider.add_span_processor(ComponentSpanProcessor())
    _tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(_tracer_provider)

    return _tracer_provider


def get_tracer(name: str = "family-graph") -> trace.Tracer:
    """Get a tracer instance for manual instrumentation.

    Args:
        name: Name of the tracer

    Returns:
        A Tracer instance (no-op if tracing disabled)
    """
    return trace.get_tracer(name)
