"""OpenTelemetry metrics for the Onboarding Assistant.

Counters:
- chat_turns_total: chat turns processed, by session
- documents_extracted_total: document classification attempts, by outcome
- gateway_requests_total: proxied Gemini calls, by HTTP status
- errors_total: errors by type

Metrics are exported to the OTLP endpoint when ENABLE_OTEL=true.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

logger = logging.getLogger(__name__)

_METRICS_CONFIGURED = False
_meter: Optional[metrics.Meter] = None
_chat_turns_counter = None
_documents_counter = None
_gateway_requests_counter = None
_errors_counter = None


def _normalize_endpoint(endpoint: str) -> str:
    endpoint = endpoint.rstrip("/")
    if not endpoint.startswith("http://") and not endpoint.startswith("https://"):
        endpoint = f"http://{endpoint}"
    return endpoint


def configure_metrics() -> None:
    """Configure OpenTelemetry metrics with OTLP exporter."""
    global _METRICS_CONFIGURED, _meter, _chat_turns_counter, _documents_counter
    global _gateway_requests_counter, _errors_counter

    if _METRICS_CONFIGURED:
        return

    if os.getenv("ENABLE_OTEL", "").lower() != "true":
        logger.debug("Metrics disabled (ENABLE_OTEL not set to true)")
        _METRICS_CONFIGURED = True
        return

    try:
        otlp_endpoint = _normalize_endpoint(
            os.getenv("OTLP_ENDPOINT")
            or os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4317")
        )
        logger.info(f"Configuring metrics export to OTLP endpoint: {otlp_endpoint}")

        exporter = OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True)
        reader = PeriodicExportingMetricReader(exporter, export_interval_millis=5000)
        metrics.set_meter_provider(MeterProvider(metric_readers=[reader]))

        _meter = metrics.get_meter("onboarding_assistant")

        _chat_turns_counter = _meter.create_counter(
            name="chat_turns_total",
            description="Total number of chat turns processed",
            unit="1",
        )
        _documents_counter = _meter.create_counter(
            name="documents_extracted_total",
            description="Total number of document extraction attempts",
            unit="1",
        )
        _gateway_requests_counter = _meter.create_counter(
            name="gateway_requests_total",
            description="Total number of requests proxied to the Gemini API",
            unit="1",
        )
        _errors_counter = _meter.create_counter(
            name="errors_total",
            description="Total number of errors by type",
            unit="1",
        )

        logger.info("OpenTelemetry metrics configured successfully")
    except Exception as e:
        logger.warning(f"Failed to configure metrics: {e}")

    _METRICS_CONFIGURED = True


def increment_chat_turns(session_id: str) -> None:
    """Increment chat turns counter."""
    if _chat_turns_counter:
        _chat_turns_counter.add(1, {"session_id": session_id})


def increment_documents_extracted(session_id: str, success: bool = True) -> None:
    """
    Increment document extraction counter.

    Args:
        session_id: Session identifier for attribution
        success: Whether the document was classified
    """
    if _documents_counter:
        _documents_counter.add(1, {"session_id": session_id, "success": str(success)})


def increment_gateway_requests(status_code: int) -> None:
    """Increment proxied request counter, labelled by response status."""
    if _gateway_requests_counter:
        _gateway_requests_counter.add(1, {"status_code": str(status_code)})


def increment_errors(error_type: str, session_id: Optional[str] = None) -> None:
    """
    Increment errors counter.

    Args:
        error_type: Category of error (e.g., 'reply_parse_error', 'gateway_error')
        session_id: Optional session identifier for attribution
    """
    if _errors_counter:
        attributes = {"error_type": error_type}
        if session_id:
            attributes["session_id"] = session_id
        _errors_counter.add(1, attributes)
