"""Shared build progress record written by workers and read by reports."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import msgspec

from build_graph.nodes import PkgNode
from serde_msgspec import StructBaseStrict

logger = logging.getLogger(__name__)


class BuildResult(StructBaseStrict, frozen=True):
    """Outcome reported by a build worker for one graph node."""

    node: PkgNode
    error: str | None = None
    log_file: str = ""
    built_files: tuple[str, ...] = ()
    used_cache: bool = False
    skipped: bool = False
    was_delta: bool = False


class BuildFailure(StructBaseStrict, frozen=True):
    """Failed build attempt kept for summary reporting."""

    node: PkgNode
    error: str
    log_file: str = ""


class NodeBuildState(msgspec.Struct):
    """Mutable per-node progress flags."""

    available: bool = False
    cached: bool = False
    delta: bool = False


class GraphBuildState:
    """Process-wide build progress for every node of a package graph.

    Instances do not lock internally. Workers mutate them while holding the
    write side of the shared :class:`build_report.locking.GraphLock` and
    reports read them under the read side.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, NodeBuildState] = {}
        self._failures: list[BuildFailure] = []
        self._conflicting_rpms: tuple[str, ...] = ()
        self._conflicting_srpms: tuple[str, ...] = ()

    def _node_state(self, node: PkgNode) -> NodeBuildState:
        state = self._nodes.get(node.node_id)
        if state is None:
            state = NodeBuildState()
            self._nodes[node.node_id] = state
        return state

    def record_build_result(self, result: BuildResult) -> None:
        """Fold a worker result into the build state."""
        if result.error is not None:
            self.record_failure(result.node, result.error, result.log_file)
            return
        if result.used_cache:
            self.mark_cached(result.node, delta=result.was_delta)
            return
        self.mark_available(result.node)

    def mark_cached(self, node: PkgNode, *, delta: bool = False) -> None:
        """Mark a node as satisfied by a prebuilt artifact."""
        state = self._node_state(node)
        state.cached = True
        state.available = True
        state.delta = delta

    def mark_available(self, node: PkgNode) -> None:
        """Mark a node as successfully built."""
        self._node_state(node).available = True

    def record_failure(self, node: PkgNode, error: str, log_file: str = "") -> None:
        """Append a failure record for a node."""
        logger.debug("Recording build failure for %s", node.srpm_file_name())
        self._failures.append(BuildFailure(node=node, error=error, log_file=log_file))

    def set_toolchain_conflicts(
        self,
        rpms: Iterable[str] = (),
        srpms: Iterable[str] = (),
    ) -> None:
        """Store the toolchain name conflicts computed by the scheduler."""
        self._conflicting_rpms = tuple(rpms)
        self._conflicting_srpms = tuple(srpms)

    def is_node_cached(self, node: PkgNode) -> bool:
        state = self._nodes.get(node.node_id)
        return state is not None and state.cached

    def is_node_delta(self, node: PkgNode) -> bool:
        state = self._nodes.get(node.node_id)
        return state is not None and state.delta

    def is_node_available(self, node: PkgNode) -> bool:
        state = self._nodes.get(node.node_id)
        return state is not None and state.available

    def build_failures(self) -> tuple[BuildFailure, ...]:
        """Return failure records in the order they were recorded.

        Returns
        -------
        tuple[BuildFailure, ...]
            Recorded failures.
        """
        return tuple(self._failures)

    def conflicting_rpms(self) -> tuple[str, ...]:
        return self._conflicting_rpms

    def conflicting_srpms(self) -> tuple[str, ...]:
        return self._conflicting_srpms


__all__ = ["BuildFailure", "BuildResult", "GraphBuildState", "NodeBuildState"]
