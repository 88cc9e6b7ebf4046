"""Package graph error types."""

from __future__ import annotations


class BuildGraphError(ValueError):
    """Raised when the package graph is queried or wired inconsistently."""


__all__ = ["BuildGraphError"]
