"""OpenTelemetry helpers for build report observability."""

from __future__ import annotations

from obs.otel.attributes import normalize_attributes
from obs.otel.logging import (
    TRACE_LOG_FORMAT,
    TraceContextFilter,
    TraceContextFormatter,
    apply_trace_context_formatter,
)
from obs.otel.scopes import SCOPE_REPORTING
from obs.otel.tracing import get_tracer, record_exception, set_span_attributes, stage_span

__all__ = [
    "SCOPE_REPORTING",
    "TRACE_LOG_FORMAT",
    "TraceContextFilter",
    "TraceContextFormatter",
    "apply_trace_context_formatter",
    "get_tracer",
    "normalize_attributes",
    "record_exception",
    "set_span_attributes",
    "stage_span",
]
