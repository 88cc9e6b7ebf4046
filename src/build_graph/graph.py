"""Rustworkx-backed package dependency graph."""

from __future__ import annotations

from collections.abc import Iterator

import rustworkx as rx

from build_graph.errors import BuildGraphError
from build_graph.nodes import NodeKind, NodeState, PkgNode, VersionedPkg


class PkgGraph:
    """Directed package graph where an edge ``u -> v`` means ``u`` blocks ``v``.

    Graph construction populates nodes and edges once; afterwards the
    scheduler and the reporting layer only read it while holding the shared
    :class:`build_report.locking.GraphLock`.
    """

    def __init__(self) -> None:
        self._graph = rx.PyDiGraph(check_cycle=False, multigraph=False)

    def __len__(self) -> int:
        return self._graph.num_nodes()

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and node_id >= 0 and self._graph.has_node(node_id)

    def __iter__(self) -> Iterator[PkgNode]:
        return iter(self.all_nodes())

    @property
    def graph(self) -> rx.PyDiGraph:
        """Return the underlying rustworkx graph."""
        return self._graph

    def add_node(
        self,
        *,
        kind: NodeKind,
        versioned_pkg: VersionedPkg,
        srpm_path: str,
        state: NodeState = NodeState.BUILD,
        rpm_path: str = "",
        architecture: str = "",
    ) -> PkgNode:
        """Add a node and return its payload with the assigned identity.

        Returns
        -------
        PkgNode
            Node payload stored in the graph.
        """
        idx = self._graph.add_node(None)
        node = PkgNode(
            node_id=idx,
            kind=kind,
            state=state,
            versioned_pkg=versioned_pkg,
            srpm_path=srpm_path,
            rpm_path=rpm_path,
            architecture=architecture,
        )
        self._graph[idx] = node
        return node

    def add_edge(self, before: PkgNode | int, after: PkgNode | int) -> None:
        """Record that ``before`` must be built before ``after``.

        Raises
        ------
        BuildGraphError
            Raised when either node is unknown or both ends are the same node.
        """
        source = self._index(before)
        target = self._index(after)
        if source == target:
            msg = f"Self edge on node {source} is not allowed."
            raise BuildGraphError(msg)
        self._graph.add_edge(source, target, None)

    def node(self, node_id: int) -> PkgNode:
        """Return the node payload for an identity.

        Returns
        -------
        PkgNode
            Stored node payload.
        """
        return self._graph[self._index(node_id)]

    def all_nodes(self) -> tuple[PkgNode, ...]:
        """Return every node in insertion order.

        Returns
        -------
        tuple[PkgNode, ...]
            All node payloads.
        """
        return tuple(self._graph[idx] for idx in self._graph.node_indices())

    def all_build_nodes(self) -> tuple[PkgNode, ...]:
        """Return build-type nodes in insertion order.

        Returns
        -------
        tuple[PkgNode, ...]
            Build node payloads.
        """
        return tuple(node for node in self.all_nodes() if node.is_build())

    def all_run_nodes(self) -> tuple[PkgNode, ...]:
        """Return run-type nodes in insertion order.

        Returns
        -------
        tuple[PkgNode, ...]
            Run node payloads.
        """
        return tuple(node for node in self.all_nodes() if node.is_run())

    def predecessors(self, node: PkgNode | int) -> tuple[PkgNode, ...]:
        """Return the nodes that must be built before ``node``.

        Order follows rustworkx edge enumeration and is not sorted.

        Returns
        -------
        tuple[PkgNode, ...]
            Direct predecessor payloads.
        """
        idx = self._index(node)
        return tuple(self._graph[pred] for pred in self._graph.predecessor_indices(idx))

    def _index(self, node: PkgNode | int) -> int:
        idx = node.node_id if isinstance(node, PkgNode) else node
        if idx < 0 or not self._graph.has_node(idx):
            msg = f"Unknown package graph node: {idx!r}."
            raise BuildGraphError(msg)
        return idx


__all__ = ["PkgGraph"]
