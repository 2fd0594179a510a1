"""Shared telemetry: logging setup, OpenTelemetry config, and tracing helpers."""

from leaddesk.shared.telemetry.logging import TraceContextFilter, setup_logging
from leaddesk.shared.telemetry.telemetry import (
    SearchTelemetry,
    get_telemetry,
    set_telemetry,
)
from leaddesk.shared.telemetry.tracing import (
    TracedOperation,
    add_span_attributes,
    get_trace_id,
    set_span_error,
    traced,
)

__all__ = [
    "setup_logging",
    "TraceContextFilter",
    "SearchTelemetry",
    "get_telemetry",
    "set_telemetry",
    "traced",
    "add_span_attributes",
    "set_span_error",
    "get_trace_id",
    "TracedOperation",
]
