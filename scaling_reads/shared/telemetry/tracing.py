"""Helpers for annotating the current span (no-ops when tracing is off)."""

from opentelemetry import trace


def add_span_event(name: str, attributes: dict | None = None) -> None:
    """Add an event to the current span."""
    span = trace.get_current_span()
    if span and span.is_recording():
        span.add_event(name, attributes=attributes or {})
