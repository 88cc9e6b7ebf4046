"""Logging helpers that correlate summary log lines with trace spans."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from opentelemetry import trace

if TYPE_CHECKING:

    class _TraceRecord(logging.LogRecord):
        trace_id: str | None
        span_id: str | None


TRACE_LOG_FORMAT = "%(levelname)s [trace_id=%(trace_id)s span_id=%(span_id)s] %(message)s"


class TraceContextFilter(logging.Filter):
    """Attach trace/span IDs to log records when available."""

    @staticmethod
    def filter(record: logging.LogRecord) -> bool:
        """Inject trace/span IDs into the log record when available.

        Returns
        -------
        bool
            True to keep the log record.
        """
        context = trace.get_current_span().get_span_context()
        trace_record = cast("_TraceRecord", record)
        if context is None or not context.is_valid:
            trace_record.trace_id = None
            trace_record.span_id = None
            return True
        trace_record.trace_id = f"{context.trace_id:032x}"
        trace_record.span_id = f"{context.span_id:016x}"
        return True


class TraceContextFormatter(logging.Formatter):
    """Formatter that tolerates records emitted without the trace filter."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "trace_id"):
            record.trace_id = None
        if not hasattr(record, "span_id"):
            record.span_id = None
        return super().format(record)


def apply_trace_context_formatter(
    logger: logging.Logger | None = None,
    *,
    fmt: str | None = None,
    datefmt: str | None = None,
) -> logging.Handler:
    """Attach a trace-aware stream handler to ``logger``.

    An existing handler installed by a previous call is reused.

    Returns
    -------
    logging.Handler
        Handler carrying the trace filter and formatter.
    """
    target = logger or logging.getLogger()
    for handler in target.handlers:
        if any(isinstance(existing, TraceContextFilter) for existing in handler.filters):
            handler.setFormatter(TraceContextFormatter(fmt or TRACE_LOG_FORMAT, datefmt=datefmt))
            return handler
    handler = logging.StreamHandler()
    handler.addFilter(TraceContextFilter())
    handler.setFormatter(TraceContextFormatter(fmt or TRACE_LOG_FORMAT, datefmt=datefmt))
    target.addHandler(handler)
    return handler


__all__ = [
    "TRACE_LOG_FORMAT",
    "TraceContextFilter",
    "TraceContextFormatter",
    "apply_trace_context_formatter",
]
