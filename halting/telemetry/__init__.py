"""
OpenTelemetry telemetry module for halting analysis.

Provides tracing and metrics instrumentation for graph construction and
failure simulation.
"""

from halting.telemetry.config import (
    configure_telemetry,
    get_tracer,
    get_meter,
    is_telemetry_configured,
    shutdown_telemetry,
)
from halting.telemetry.decorators import trace_sync

__all__ = [
    # Configuration
    "configure_telemetry",
    "get_tracer",
    "get_meter",
    "is_telemetry_configured",
    "shutdown_telemetry",
    # Decorators
    "trace_sync",
]
