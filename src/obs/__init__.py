"""Observability helpers for build reporting."""
