"""Build outcome classification and summary reporting."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from build_report.blockers import blocker_annotation, resolve_blockers
    from build_report.classify import (
        OUTCOME_ORDER,
        BuildClassification,
        Outcome,
        classify_outcomes,
    )
    from build_report.config import BuildSummaryConfig
    from build_report.console import SummaryLine, build_summary_lines, log_build_summary
    from build_report.locking import GraphLock
    from build_report.results import log_build_result
    from build_report.state import BuildFailure, BuildResult, GraphBuildState
    from build_report.summary import (
        BuildSummaryReport,
        print_build_summary,
        record_build_summary,
        report_build_summary,
    )
    from build_report.tabular import CSV_HEADER, SummaryRow, summary_rows, write_summary_csv

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "CSV_HEADER": ("build_report.tabular", "CSV_HEADER"),
    "OUTCOME_ORDER": ("build_report.classify", "OUTCOME_ORDER"),
    "BuildClassification": ("build_report.classify", "BuildClassification"),
    "BuildFailure": ("build_report.state", "BuildFailure"),
    "BuildResult": ("build_report.state", "BuildResult"),
    "BuildSummaryConfig": ("build_report.config", "BuildSummaryConfig"),
    "BuildSummaryReport": ("build_report.summary", "BuildSummaryReport"),
    "GraphBuildState": ("build_report.state", "GraphBuildState"),
    "GraphLock": ("build_report.locking", "GraphLock"),
    "Outcome": ("build_report.classify", "Outcome"),
    "SummaryLine": ("build_report.console", "SummaryLine"),
    "SummaryRow": ("build_report.tabular", "SummaryRow"),
    "blocker_annotation": ("build_report.blockers", "blocker_annotation"),
    "build_summary_lines": ("build_report.console", "build_summary_lines"),
    "classify_outcomes": ("build_report.classify", "classify_outcomes"),
    "log_build_result": ("build_report.results", "log_build_result"),
    "log_build_summary": ("build_report.console", "log_build_summary"),
    "print_build_summary": ("build_report.summary", "print_build_summary"),
    "record_build_summary": ("build_report.summary", "record_build_summary"),
    "report_build_summary": ("build_report.summary", "report_build_summary"),
    "resolve_blockers": ("build_report.blockers", "resolve_blockers"),
    "summary_rows": ("build_report.tabular", "summary_rows"),
    "write_summary_csv": ("build_report.tabular", "write_summary_csv"),
}


def __getattr__(name: str) -> object:
    target = _EXPORT_MAP.get(name)
    if target is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    module_path, attr_name = target
    module = importlib.import_module(module_path)
    return getattr(module, attr_name)


def __dir__() -> list[str]:
    return sorted(list(globals()) + list(_EXPORT_MAP))


__all__ = [
    "CSV_HEADER",
    "OUTCOME_ORDER",
    "BuildClassification",
    "BuildFailure",
    "BuildResult",
    "BuildSummaryConfig",
    "BuildSummaryReport",
    "GraphBuildState",
    "GraphLock",
    "Outcome",
    "SummaryLine",
    "SummaryRow",
    "blocker_annotation",
    "build_summary_lines",
    "classify_outcomes",
    "log_build_result",
    "log_build_summary",
    "print_build_summary",
    "record_build_summary",
    "report_build_summary",
    "resolve_blockers",
    "summary_rows",
    "write_summary_csv",
]
