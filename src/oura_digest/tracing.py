"""OpenTelemetry tracing for a single digest run."""

from __future__ import annotations

import os

import structlog
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from . import __version__
from .config import TracingSettings

logger = structlog.get_logger(__name__)


def setup_tracing(settings: TracingSettings) -> TracerProvider | None:
    """Install an OTLP-exporting tracer provider for this run.

    ``OTEL_TRACES_EXPORTER=none`` turns export off even when enabled.

    Returns:
        The installed provider, or None when tracing is off.
    """
    if not settings.enabled:
        logger.info("tracing_disabled", reason="settings")
        return None

    if os.getenv("OTEL_TRACES_EXPORTER", "otlp").lower() in {"none", ""}:
        logger.info("tracing_disabled", reason="exporter")
        return None

    provider = TracerProvider(
        resource=Resource.create(
            {SERVICE_NAME: settings.service_name, SERVICE_VERSION: __version__}
        )
    )
    # Without an endpoint the exporter falls back to OTEL_EXPORTER_OTLP_* variables.
    exporter = (
        OTLPSpanExporter(endpoint=settings.endpoint) if settings.endpoint else OTLPSpanExporter()
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    logger.info(
        "tracing_configured",
        service_name=settings.service_name,
        endpoint=settings.endpoint or "env",
    )
    return provider


def shutdown_tracing(provider: TracerProvider | None) -> None:
    """Flush batched spans before the process exits."""
    if provider is None:
        return
    if not provider.force_flush():
        logger.warning("tracing_flush_incomplete")
    provider.shutdown()
