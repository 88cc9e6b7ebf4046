"""Package graph node payloads."""

from __future__ import annotations

from enum import StrEnum
from pathlib import PurePath

from serde_msgspec import StructBaseStrict


class NodeKind(StrEnum):
    """Kind of work a graph node represents."""

    BUILD = "build"
    RUN = "run"


class NodeState(StrEnum):
    """Resolution state recorded on a graph node by graph construction."""

    META = "meta"
    BUILD = "build"
    UP_TO_DATE = "up-to-date"
    UNRESOLVED = "unresolved"
    CACHED = "cached"


class VersionedPkg(StructBaseStrict, frozen=True):
    """Package name with optional version constraints.

    ``condition``/``version`` form the primary constraint and
    ``s_condition``/``s_version`` an optional second bound, so that a range
    such as ``>= 1.1 < 3.0`` can be expressed.
    """

    name: str
    version: str = ""
    condition: str = ""
    s_version: str = ""
    s_condition: str = ""

    def __str__(self) -> str:
        parts = [self.name]
        parts.extend(_constraint(self.condition, self.version))
        parts.extend(_constraint(self.s_condition, self.s_version))
        return " ".join(parts)


def _constraint(condition: str, version: str) -> tuple[str, ...]:
    if not version:
        return ()
    return (condition or "=", version)


class PkgNode(StructBaseStrict, frozen=True):
    """Immutable node payload stored in the package graph.

    ``node_id`` is assigned by :class:`build_graph.graph.PkgGraph` and is the
    stable identity of the node within one graph.
    """

    node_id: int
    kind: NodeKind
    state: NodeState
    versioned_pkg: VersionedPkg
    srpm_path: str
    rpm_path: str = ""
    architecture: str = ""

    def srpm_file_name(self) -> str:
        """Return the base file name of the node's source archive.

        Returns
        -------
        str
            SRPM file name without directories.
        """
        return PurePath(self.srpm_path).name

    def friendly_name(self) -> str:
        """Return a human readable node label.

        Returns
        -------
        str
            Versioned package string tagged with the node kind.
        """
        return f"{self.versioned_pkg}({self.kind.value.upper()})"

    def is_build(self) -> bool:
        """Return whether the node is a buildable source unit.

        Returns
        -------
        bool
            ``True`` for build-type nodes.
        """
        match self.kind:
            case NodeKind.BUILD:
                return True
            case NodeKind.RUN:
                return False

    def is_run(self) -> bool:
        """Return whether the node is a runtime dependency requirement.

        Returns
        -------
        bool
            ``True`` for run-type nodes.
        """
        return not self.is_build()

    def is_unresolved(self) -> bool:
        """Return whether graph construction could not resolve this node.

        Returns
        -------
        bool
            ``True`` when the node state is ``unresolved``.
        """
        return self.state is NodeState.UNRESOLVED


__all__ = ["NodeKind", "NodeState", "PkgNode", "VersionedPkg"]
