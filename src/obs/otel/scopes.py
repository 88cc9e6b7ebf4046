"""Canonical OpenTelemetry instrumentation scopes for build reporting."""

from __future__ import annotations

from enum import StrEnum


class ScopeName(StrEnum):
    """Instrumentation scope names."""

    REPORTING = "build_report.reporting"


SCOPE_REPORTING = ScopeName.REPORTING

STAGE_ATTRIBUTE = "build_report.stage"

__all__ = [
    "SCOPE_REPORTING",
    "STAGE_ATTRIBUTE",
    "ScopeName",
]
