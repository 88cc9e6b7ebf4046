"""Build summary entry points used by the scheduler at the end of a run."""

from __future__ import annotations

import logging
from pathlib import Path

from build_graph.graph import PkgGraph
from build_report.blockers import resolve_blockers
from build_report.classify import BuildClassification, classify_outcomes
from build_report.config import BuildSummaryConfig
from build_report.console import SummaryLine, build_summary_lines, log_build_summary
from build_report.locking import GraphLock
from build_report.state import GraphBuildState
from build_report.tabular import SummaryRow, summary_rows, write_summary_csv
from obs.otel import set_span_attributes, stage_span
from serde_msgspec import StructBaseStrict, to_builtins


class BuildSummaryReport(StructBaseStrict, frozen=True):
    """Everything rendered from one consistent graph snapshot."""

    classification: BuildClassification
    blockers: dict[str, str]
    lines: tuple[SummaryLine, ...]
    rows: tuple[SummaryRow, ...]
    csv_path: str | None = None
    csv_written: bool = False


def _summary_lines(
    classification: BuildClassification,
    state: GraphBuildState,
    *,
    allow_toolchain_rebuilds: bool,
) -> tuple[SummaryLine, ...]:
    return build_summary_lines(
        classification,
        rpm_conflicts=state.conflicting_rpms(),
        srpm_conflicts=state.conflicting_srpms(),
        allow_toolchain_rebuilds=allow_toolchain_rebuilds,
    )


def print_build_summary(
    graph: PkgGraph,
    lock: GraphLock,
    state: GraphBuildState,
    *,
    allow_toolchain_rebuilds: bool = False,
    logger: logging.Logger | None = None,
) -> tuple[SummaryLine, ...]:
    """Log the console summary of the current build state.

    Returns
    -------
    tuple[SummaryLine, ...]
        Lines that were logged.
    """
    with stage_span("build_summary.print", stage="summary"), lock.read_locked():
        classification = classify_outcomes(graph, state)
        lines = _summary_lines(
            classification,
            state,
            allow_toolchain_rebuilds=allow_toolchain_rebuilds,
        )
        log_build_summary(lines, logger)
    return lines


def record_build_summary(
    graph: PkgGraph,
    lock: GraphLock,
    state: GraphBuildState,
    output_path: Path | str,
) -> bool:
    """Write the CSV summary of the current build state.

    Returns
    -------
    bool
        ``True`` when the CSV was written; write errors are logged instead of raised.
    """
    with (
        stage_span("build_summary.record", stage="summary", attributes={"path": str(output_path)}),
        lock.read_locked(),
    ):
        classification = classify_outcomes(graph, state)
        rows = summary_rows(classification, resolve_blockers(graph, classification))
        return write_summary_csv(rows, output_path)


def report_build_summary(
    graph: PkgGraph,
    lock: GraphLock,
    state: GraphBuildState,
    config: BuildSummaryConfig | None = None,
    *,
    logger: logging.Logger | None = None,
) -> BuildSummaryReport:
    """Render the console summary and, when configured, the CSV summary.

    Both sinks are rendered from a single read-locked snapshot, so their
    categories always agree. A failed CSV write is logged and does not stop
    the console summary.

    Parameters
    ----------
    graph
        Package graph being built.
    lock
        Lock shared with the scheduler.
    state
        Build progress recorded by the scheduler.
    config
        Reporting configuration; defaults to :meth:`BuildSummaryConfig.from_env`.
    logger
        Destination for the console summary.

    Returns
    -------
    BuildSummaryReport
        Classification, blockers and rendered output.
    """
    resolved = config or BuildSummaryConfig.from_env()
    with stage_span("build_summary.report", stage="summary") as span, lock.read_locked():
        classification = classify_outcomes(graph, state)
        blockers = resolve_blockers(graph, classification)
        rows = summary_rows(classification, blockers)
        csv_written = False
        if resolved.csv_path is not None:
            csv_written = write_summary_csv(rows, resolved.csv_path)
        lines = _summary_lines(
            classification,
            state,
            allow_toolchain_rebuilds=resolved.allow_toolchain_rebuilds,
        )
        log_build_summary(lines, logger)
        set_span_attributes(
            span,
            {
                "build_units": classification.total,
                "csv_written": csv_written,
                "outcome_counts": to_builtins(classification.counts()),
            },
        )
    return BuildSummaryReport(
        classification=classification,
        blockers=blockers,
        lines=lines,
        rows=rows,
        csv_path=None if resolved.csv_path is None else str(resolved.csv_path),
        csv_written=csv_written,
    )


__all__ = [
    "BuildSummaryReport",
    "print_build_summary",
    "record_build_summary",
    "report_build_summary",
]
