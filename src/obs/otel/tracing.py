"""Span helpers for build reporting stages."""

from __future__ import annotations

import time
from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode

from obs.otel.attributes import normalize_attributes
from obs.otel.scopes import SCOPE_REPORTING, STAGE_ATTRIBUTE


def get_tracer(scope_name: str) -> trace.Tracer:
    """Return the tracer registered for an instrumentation scope."""
    return trace.get_tracer(scope_name)


def set_span_attributes(span: Span, attrs: Mapping[str, object] | None) -> None:
    """Normalize ``attrs`` and attach them to ``span``."""
    for key, value in normalize_attributes(attrs).items():
        span.set_attribute(key, value)


def record_exception(span: Span, exc: Exception) -> None:
    """Attach ``exc`` to ``span`` and flag the span as failed."""
    span.record_exception(exc)
    span.set_status(Status(StatusCode.ERROR, str(exc)))


@contextmanager
def stage_span(
    name: str,
    *,
    stage: str,
    scope_name: str = SCOPE_REPORTING,
    attributes: Mapping[str, object] | None = None,
) -> Iterator[Span]:
    """Run a reporting stage inside a span.

    The span carries the stage name and, once the block exits, the elapsed
    wall time in ``duration_s`` and ``status`` set to ``ok`` or ``error``.
    Exceptions are recorded on the span and re-raised.

    Parameters
    ----------
    name
        Span name.
    stage
        Value stored under the stage attribute.
    scope_name
        Instrumentation scope of the tracer.
    attributes
        Extra attributes set when the span starts.

    Yields
    ------
    Span
        The active span.
    """
    start_attrs: dict[str, object] = {STAGE_ATTRIBUTE: stage, **(attributes or {})}
    started = time.monotonic()
    status = "ok"
    tracer = get_tracer(scope_name)
    with tracer.start_as_current_span(
        name,
        attributes=normalize_attributes(start_attrs),
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as exc:
            status = "error"
            record_exception(span, exc)
            raise
        finally:
            set_span_attributes(
                span,
                {"duration_s": time.monotonic() - started, "status": status},
            )


__all__ = [
    "get_tracer",
    "record_exception",
    "set_span_attributes",
    "stage_span",
]
