"""Tests for build report tracing helpers."""

from __future__ import annotations

import pytest
from opentelemetry.trace import StatusCode

from obs.otel import SCOPE_REPORTING, normalize_attributes, stage_span
from tests.obs._support.otel_harness import get_otel_harness


def test_stage_span_records_stage_and_status() -> None:
    """Stage spans should carry the stage, duration and status."""
    harness = get_otel_harness()
    harness.reset()
    with stage_span("unit.stage", stage="summary", attributes={"units": 4}):
        pass
    spans = harness.finished_spans()
    assert [span.name for span in spans] == ["unit.stage"]
    attributes = spans[0].attributes or {}
    assert attributes.get("build_report.stage") == "summary"
    assert attributes.get("units") == 4
    assert attributes.get("status") == "ok"
    duration = attributes.get("duration_s")
    assert isinstance(duration, float)
    assert duration >= 0.0
    assert spans[0].instrumentation_scope.name == SCOPE_REPORTING


def test_stage_span_records_exceptions() -> None:
    """Exceptions should mark the span as failed and propagate."""
    harness = get_otel_harness()
    harness.reset()
    with pytest.raises(ValueError, match="boom"), stage_span("unit.fail", stage="summary"):
        raise ValueError("boom")
    (span,) = harness.finished_spans()
    assert span.status.status_code is StatusCode.ERROR
    assert (span.attributes or {}).get("status") == "error"
    assert any(event.name == "exception" for event in span.events)


def test_normalize_attributes() -> None:
    """Attributes should be converted to OpenTelemetry-safe values."""
    normalized = normalize_attributes(
        {
            "name": "summary",
            "count": 3,
            "skip": None,
            "paths": ("a.srpm", "b.srpm"),
            "mixed": [1, "two"],
            "mapping": {"b": 1, "a": 2},
        }
    )
    assert normalized == {
        "name": "summary",
        "count": 3,
        "paths": ["a.srpm", "b.srpm"],
        "mixed": ["1", "two"],
        "mapping": '{"a": 2, "b": 1}',
    }
    assert normalize_attributes(None) == {}
