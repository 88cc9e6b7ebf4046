"""Tests for the CSV build summary."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

import pytest

from build_graph import PkgGraph
from build_report import (
    CSV_HEADER,
    GraphBuildState,
    Outcome,
    SummaryRow,
    classify_outcomes,
    resolve_blockers,
    summary_rows,
    write_summary_csv,
)
from tests.test_helpers.build_graphs import add_build_node, sample_build


def test_sample_build_csv(tmp_path: Path) -> None:
    """The CSV should hold a header and one row per build unit."""
    build = sample_build()
    classification = classify_outcomes(build.graph, build.state)
    rows = summary_rows(classification, resolve_blockers(build.graph, classification))
    output = tmp_path / "build_summary.csv"
    assert write_summary_csv(rows, output) is True
    assert output.read_text(encoding="utf-8") == (
        "Package,State,Blocker\n"
        "a.srpm,Built,\n"
        "b.srpm,Failed,\n"
        "c.srpm,Unbuilt,b.srpm-FAIL\n"
    )


def test_rows_follow_category_block_order() -> None:
    """Rows should be grouped Built, PreBuilt, PreBuiltDelta, Failed, Unbuilt."""
    graph = PkgGraph()
    state = GraphBuildState()
    blocked = add_build_node(graph, "a-blocked")
    failed = add_build_node(graph, "b-failed")
    state.record_failure(failed, "error", "/logs/b.log")
    state.mark_cached(add_build_node(graph, "c-delta"), delta=True)
    state.mark_cached(add_build_node(graph, "d-prebuilt"))
    state.mark_available(add_build_node(graph, "e-built"))
    graph.add_edge(failed, blocked)
    classification = classify_outcomes(graph, state)
    rows = summary_rows(classification, resolve_blockers(graph, classification))
    assert [row.state for row in rows] == [
        Outcome.BUILT,
        Outcome.PREBUILT,
        Outcome.PREBUILT_DELTA,
        Outcome.FAILED,
        Outcome.UNBUILT,
    ]
    assert rows[-1] == SummaryRow(
        package="a-blocked.srpm",
        state=Outcome.UNBUILT,
        blocker="b-failed.srpm-FAIL",
    )


def test_blockers_ignored_for_successful_rows() -> None:
    """Only Failed and Unbuilt rows should carry a blocker column."""
    graph = PkgGraph()
    state = GraphBuildState()
    node = add_build_node(graph, "done")
    state.mark_available(node)
    classification = classify_outcomes(graph, state)
    rows = summary_rows(classification, {node.srpm_path: "stale-FAIL"})
    assert rows == (SummaryRow(package="done.srpm", state=Outcome.BUILT),)


def test_csv_round_trip_matches_classification(tmp_path: Path) -> None:
    """Parsing the CSV should recover states and blockers for every unit."""
    build = sample_build()
    extra = add_build_node(build.graph, "comma,name")
    build.graph.add_edge(build.nodes["c"], extra)
    classification = classify_outcomes(build.graph, build.state)
    blockers = resolve_blockers(build.graph, classification)
    output = tmp_path / "summary.csv"
    assert write_summary_csv(summary_rows(classification, blockers), output)
    with output.open(encoding="utf-8", newline="") as handle:
        records = list(csv.reader(handle))
    assert tuple(records[0]) == CSV_HEADER
    parsed = {row[0]: (row[1], row[2]) for row in records[1:]}
    assert len(parsed) == classification.total
    for path, outcome in classification.outcomes.items():
        node = classification.nodes[path]
        assert parsed[node.srpm_file_name()] == (outcome.value, blockers.get(path, ""))
    assert parsed["comma,name.srpm"] == ("Unbuilt", "c.srpm-UNBUILT")


def test_unwritable_path_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """A CSV that cannot be created should log a warning instead of raising."""
    output = tmp_path / "missing" / "summary.csv"
    with caplog.at_level(logging.WARNING, logger="build_report.tabular"):
        written = write_summary_csv((SummaryRow(package="a.srpm", state=Outcome.BUILT),), output)
    assert written is False
    assert not output.exists()
    assert "Unable to create" in caplog.text
