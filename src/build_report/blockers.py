"""Name the failed or blocked predecessors holding back a build unit."""

from __future__ import annotations

import logging

from build_graph.graph import PkgGraph
from build_graph.nodes import PkgNode
from build_report.classify import BuildClassification, Outcome

logger = logging.getLogger(__name__)

FAIL_SUFFIX = "-FAIL"
UNBUILT_SUFFIX = "-UNBUILT"


def _blocker_token(
    predecessor: PkgNode,
    failed: frozenset[str],
    unbuilt: frozenset[str],
) -> str | None:
    if predecessor.srpm_path in failed:
        return predecessor.srpm_file_name() + FAIL_SUFFIX
    if predecessor.srpm_path in unbuilt:
        return predecessor.srpm_file_name() + UNBUILT_SUFFIX
    return None


def blocker_annotation(
    graph: PkgGraph,
    node: PkgNode,
    classification: BuildClassification,
) -> str:
    """Return the blocker annotation for a build unit.

    Direct predecessors are visited in graph edge order. A predecessor owned
    by a Failed unit yields ``<srpm>-FAIL`` and one owned by an Unbuilt unit
    yields ``<srpm>-UNBUILT``. Every qualifying predecessor contributes its
    own token, so several run nodes of one blocked SRPM repeat that token.

    Returns
    -------
    str
        Space separated tokens, or an empty string when nothing blocks the node.
    """
    failed = classification.failed_paths()
    unbuilt = classification.unbuilt_paths()
    tokens: list[str] = []
    for predecessor in graph.predecessors(node):
        token = _blocker_token(predecessor, failed, unbuilt)
        if token is not None:
            tokens.append(token)
    return " ".join(tokens)


def resolve_blockers(graph: PkgGraph, classification: BuildClassification) -> dict[str, str]:
    """Return blocker annotations for every Failed and Unbuilt build unit.

    A failure is expected to be a root cause, so a Failed unit with blockers
    is logged as a warning; its annotation is still returned.

    Returns
    -------
    dict[str, str]
        Mapping of SRPM path to annotation.
    """
    blockers: dict[str, str] = {}
    for outcome in (Outcome.FAILED, Outcome.UNBUILT):
        for node in classification.members(outcome):
            annotation = blocker_annotation(graph, node, classification)
            if annotation and outcome is Outcome.FAILED:
                logger.warning(
                    "Failed SRPM %s has blocking predecessors: %s",
                    node.srpm_file_name(),
                    annotation,
                )
            blockers[node.srpm_path] = annotation
    return blockers


__all__ = ["FAIL_SUFFIX", "UNBUILT_SUFFIX", "blocker_annotation", "resolve_blockers"]
