"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from scaling_reads.shared.telemetry.logging import setup_logging
from scaling_reads.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)
from scaling_reads.shared.telemetry.tracing import add_span_event

__all__ = [
    "setup_logging",
    "TelemetryConfig",
    "get_telemetry",
    "set_telemetry",
    "add_span_event",
]
