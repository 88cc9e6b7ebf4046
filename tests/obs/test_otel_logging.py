"""Tests for trace-aware log formatting."""

from __future__ import annotations

import io
import logging

from obs.otel import TraceContextFilter, apply_trace_context_formatter, stage_span
from tests.obs._support.otel_harness import get_otel_harness


def _capture_logger(name: str) -> tuple[logging.Logger, io.StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    stream = io.StringIO()
    handler = apply_trace_context_formatter(logger)
    assert isinstance(handler, logging.StreamHandler)
    handler.setStream(stream)
    return logger, stream


def test_log_lines_outside_spans_have_empty_ids() -> None:
    """Records logged outside a span should render without trace ids."""
    logger, stream = _capture_logger("tests.trace.none")
    logger.info("Built SRPMs:")
    assert stream.getvalue() == "INFO [trace_id=None span_id=None] Built SRPMs:\n"


def test_log_lines_inside_spans_carry_ids() -> None:
    """Records logged inside a span should carry its trace and span ids."""
    get_otel_harness()
    logger, stream = _capture_logger("tests.trace.span")
    with stage_span("unit.log", stage="summary") as span:
        logger.info("--> a.srpm")
        context = span.get_span_context()
    expected = f"[trace_id={context.trace_id:032x} span_id={context.span_id:016x}]"
    assert expected in stream.getvalue()


def test_handler_is_reused() -> None:
    """Applying the formatter twice should not add a second handler."""
    logger, _stream = _capture_logger("tests.trace.reuse")
    handler = apply_trace_context_formatter(logger)
    assert logger.handlers == [handler]
    assert any(isinstance(item, TraceContextFilter) for item in handler.filters)
