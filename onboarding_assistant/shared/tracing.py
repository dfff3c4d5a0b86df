"""Tracing setup utilities.

When ``ENABLE_OTEL=true`` spans are exported over OTLP/gRPC to
``OTLP_ENDPOINT`` (or ``OTEL_EXPORTER_OTLP_ENDPOINT``). Otherwise the global
no-op tracer provider stays in place and spans are still created, so the
``TraceContextFilter`` can correlate log lines within a request.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import SpanKind

from .logging import parse_otlp_headers

logger = logging.getLogger(__name__)

INSTRUMENTATION_PREFIX = "onboarding_assistant"

_TRACING_CONFIGURED = False


def configure_tracing(service_name: str) -> None:
    """Install an OTLP-exporting tracer provider if observability is enabled."""

    global _TRACING_CONFIGURED
    if _TRACING_CONFIGURED:
        return

    if not os.getenv("OTEL_SERVICE_NAME"):
        os.environ["OTEL_SERVICE_NAME"] = service_name

    if os.getenv("ENABLE_OTEL", "").lower() != "true":
        logger.debug("Tracing export disabled (ENABLE_OTEL not set to true)")
        _TRACING_CONFIGURED = True
        return

    endpoint = os.getenv("OTLP_ENDPOINT") or os.getenv(
        "OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317"
    )
    headers = parse_otlp_headers(
        os.getenv("OTLP_HEADERS") or os.getenv("OTEL_EXPORTER_OTLP_HEADERS")
    )

    try:
        provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=endpoint,
                    headers=headers,
                    insecure=endpoint.startswith("http://"),
                )
            )
        )
        trace.set_tracer_provider(provider)
        logger.info(f"Configured trace export to OTLP endpoint: {endpoint}")
    except Exception as e:
        logger.warning(f"Failed to configure tracing: {e}")

    _TRACING_CONFIGURED = True


def get_tracer(component: str) -> trace.Tracer:
    """Return a tracer scoped to one application component."""
    return trace.get_tracer(f"{INSTRUMENTATION_PREFIX}.{component}")


def start_span(
    component: str,
    name: str,
    *,
    session_id: Optional[str] = None,
    **attrs: Any,
):
    """Start a current INTERNAL span carrying the session id when known."""
    attributes: Dict[str, Any] = dict(attrs)
    if session_id:
        attributes["session.id"] = session_id
    return get_tracer(component).start_as_current_span(
        name=name,
        kind=SpanKind.INTERNAL,
        attributes=attributes,
    )
