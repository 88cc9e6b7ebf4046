"""Shared utilities."""

from utils.env_utils import env_bool, env_path, env_value

__all__ = [
    "env_bool",
    "env_path",
    "env_value",
]
