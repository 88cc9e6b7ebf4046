"""Partition build units of a package graph into outcome categories."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import StrEnum

from build_graph.graph import PkgGraph
from build_graph.nodes import PkgNode
from build_report.state import BuildFailure, GraphBuildState
from serde_msgspec import StructBaseStrict

logger = logging.getLogger(__name__)


class Outcome(StrEnum):
    """Outcome of a build unit; values are the literal report state strings."""

    BUILT = "Built"
    PREBUILT = "PreBuilt"
    PREBUILT_DELTA = "PreBuiltDelta"
    FAILED = "Failed"
    UNBUILT = "Unbuilt"


OUTCOME_ORDER: tuple[Outcome, ...] = (
    Outcome.BUILT,
    Outcome.PREBUILT,
    Outcome.PREBUILT_DELTA,
    Outcome.FAILED,
    Outcome.UNBUILT,
)


def _member_sort_key(node: PkgNode) -> tuple[str, str]:
    return (node.srpm_file_name(), node.srpm_path)


class BuildClassification(StructBaseStrict, frozen=True):
    """Point-in-time outcome partition of every build unit.

    Build units are keyed by SRPM path. ``failures`` only holds records for
    units classified as :attr:`Outcome.FAILED`.
    """

    outcomes: dict[str, Outcome]
    nodes: dict[str, PkgNode]
    failures: dict[str, BuildFailure]
    unresolved: tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def outcome_of(self, node: PkgNode) -> Outcome | None:
        """Return the outcome of the build unit owning ``node``.

        Returns
        -------
        Outcome | None
            Outcome for the node's SRPM, or ``None`` when it is not a build unit.
        """
        return self.outcomes.get(node.srpm_path)

    def members(self, outcome: Outcome) -> tuple[PkgNode, ...]:
        """Return the build units in a category sorted by SRPM file name.

        Returns
        -------
        tuple[PkgNode, ...]
            Representative node for each unit in the category.
        """
        selected = [self.nodes[path] for path, value in self.outcomes.items() if value is outcome]
        return tuple(sorted(selected, key=_member_sort_key))

    def counts(self) -> dict[Outcome, int]:
        """Return the number of build units per outcome in report order.

        Returns
        -------
        dict[Outcome, int]
            Count for every outcome, including empty categories.
        """
        counts = dict.fromkeys(OUTCOME_ORDER, 0)
        for outcome in self.outcomes.values():
            counts[outcome] += 1
        return counts

    def paths_for(self, outcome: Outcome) -> frozenset[str]:
        """Return the SRPM paths classified as ``outcome``.

        Returns
        -------
        frozenset[str]
            SRPM paths in the category.
        """
        return frozenset(path for path, value in self.outcomes.items() if value is outcome)

    def failed_paths(self) -> frozenset[str]:
        return self.paths_for(Outcome.FAILED)

    def unbuilt_paths(self) -> frozenset[str]:
        return self.paths_for(Outcome.UNBUILT)


def node_outcome(
    node: PkgNode,
    state: GraphBuildState,
    failures: Mapping[str, BuildFailure],
) -> Outcome:
    """Return the outcome of a single build node; the first matching rule wins.

    Returns
    -------
    Outcome
        Outcome category for the node.
    """
    if state.is_node_cached(node):
        if state.is_node_delta(node):
            return Outcome.PREBUILT_DELTA
        return Outcome.PREBUILT
    if state.is_node_available(node):
        return Outcome.BUILT
    if node.srpm_path in failures:
        return Outcome.FAILED
    return Outcome.UNBUILT


def unresolved_dependencies(graph: PkgGraph) -> tuple[str, ...]:
    """Return sorted display strings of unresolved run-type nodes.

    Returns
    -------
    tuple[str, ...]
        Deduplicated versioned package strings.
    """
    found = {str(node.versioned_pkg) for node in graph.all_run_nodes() if node.is_unresolved()}
    return tuple(sorted(found))


def classify_outcomes(graph: PkgGraph, state: GraphBuildState) -> BuildClassification:
    """Classify every build unit of ``graph`` against ``state``.

    The caller must hold the read side of the shared graph lock so graph and
    state describe the same instant.

    Parameters
    ----------
    graph
        Package graph to classify.
    state
        Build progress recorded by the scheduler.

    Returns
    -------
    BuildClassification
        Outcome partition and unresolved dependency set.
    """
    recorded: dict[str, BuildFailure] = {}
    for failure in state.build_failures():
        recorded.setdefault(failure.node.srpm_path, failure)
    outcomes: dict[str, Outcome] = {}
    nodes: dict[str, PkgNode] = {}
    for node in graph.all_build_nodes():
        if node.srpm_path in outcomes:
            continue
        outcomes[node.srpm_path] = node_outcome(node, state, recorded)
        nodes[node.srpm_path] = node
    failures = {
        path: failure
        for path, failure in recorded.items()
        if outcomes.get(path) is Outcome.FAILED
    }
    ignored = len(recorded) - len(failures)
    if ignored:
        logger.debug("Ignoring %d failure records for units that later succeeded", ignored)
    return BuildClassification(
        outcomes=outcomes,
        nodes=nodes,
        failures=failures,
        unresolved=unresolved_dependencies(graph),
    )


__all__ = [
    "OUTCOME_ORDER",
    "BuildClassification",
    "Outcome",
    "classify_outcomes",
    "node_outcome",
    "unresolved_dependencies",
]
