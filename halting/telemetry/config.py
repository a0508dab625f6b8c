"""
OpenTelemetry configuration for halting analysis.

Configures the tracer provider, meter provider, and exporters for sending
telemetry data to an OTLP collector. Until configure_telemetry() is called
the OpenTelemetry no-op providers are used.
"""

import logging
from functools import lru_cache
from typing import Optional

from opentelemetry import trace, metrics
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.instrumentation.logging import LoggingInstrumentor

from halting.config.settings import get_settings

logger = logging.getLogger(__name__)

# Global state
_telemetry_configured = False
_tracer_provider: Optional[TracerProvider] = None
_meter_provider: Optional[MeterProvider] = None


def configure_telemetry(
    service_name: Optional[str] = None,
    service_version: Optional[str] = None,
    otlp_endpoint: Optional[str] = None,
    enable_logging: bool = True,
) -> None:
    """
    Configure OpenTelemetry for the application.

    Should be called once at startup. Unset arguments fall back to Settings.

    Args:
        service_name: Name of the service
        service_version: Version of the service
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        enable_logging: Whether to enable log correlation with traces
    """
    global _telemetry_configured, _tracer_provider, _meter_provider

    if _telemetry_configured:
        logger.warning("Telemetry already configured, skipping reconfiguration")
        return

    settings = get_settings()
    service_name = service_name or settings.service_name
    service_version = service_version or settings.service_version
    otlp_endpoint = otlp_endpoint or settings.otlp_endpoint

    logger.info(
        f"Configuring OpenTelemetry: service={service_name}, "
        f"version={service_version}, endpoint={otlp_endpoint}"
    )

    resource = Resource.create({
        SERVICE_NAME: service_name,
        SERVICE_VERSION: service_version,
    })

    _tracer_provider = TracerProvider(resource=resource)
    _tracer_provider.add_span_processor(
        BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
    )
    trace.set_tracer_provider(_tracer_provider)

    metric_reader = PeriodicExportingMetricReader(
        OTLPMetricExporter(endpoint=otlp_endpoint, insecure=True),
        export_interval_millis=60000,
    )
    _meter_provider = MeterProvider(resource=resource, metric_readers=[metric_reader])
    metrics.set_meter_provider(_meter_provider)

    if enable_logging:
        LoggingInstrumentor().instrument(set_logging_format=False)

    _telemetry_configured = True
    logger.info("OpenTelemetry configured successfully")


def shutdown_telemetry() -> None:
    """
    Shutdown telemetry providers gracefully.

    Flushes pending spans so a short CLI run still exports its trace.
    """
    global _telemetry_configured, _tracer_provider, _meter_provider

    if not _telemetry_configured:
        return

    logger.info("Shutting down OpenTelemetry...")

    if _tracer_provider:
        _tracer_provider.force_flush()
        _tracer_provider.shutdown()
        _tracer_provider = None

    if _meter_provider:
        _meter_provider.shutdown()
        _meter_provider = None

    _telemetry_configured = False


@lru_cache(maxsize=32)
def get_tracer(name: str = "halting") -> trace.Tracer:
    """Get a tracer instance (no-op until telemetry is configured)."""
    return trace.get_tracer(name)


@lru_cache(maxsize=32)
def get_meter(name: str = "halting") -> metrics.Meter:
    """Get a meter instance (no-op until telemetry is configured)."""
    return metrics.get_meter(name)


def is_telemetry_configured() -> bool:
    """Check if telemetry has been configured."""
    return _telemetry_configured
