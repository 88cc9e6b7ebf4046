"""Package dependency graph model."""

from __future__ import annotations

from build_graph.errors import BuildGraphError
from build_graph.graph import PkgGraph
from build_graph.nodes import NodeKind, NodeState, PkgNode, VersionedPkg

__all__ = [
    "BuildGraphError",
    "NodeKind",
    "NodeState",
    "PkgGraph",
    "PkgNode",
    "VersionedPkg",
]
