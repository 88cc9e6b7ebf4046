"""Helpers for reading build switches from the process environment."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal, overload

_LOGGER = logging.getLogger(__name__)

OnInvalid = Literal["default", "none", "false"]

_TRUE_VALUES = frozenset({"1", "true", "yes", "y"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n"})


def env_value(name: str) -> str | None:
    """Return the stripped value of ``name``, treating blank values as unset.

    Returns
    -------
    str | None
        Stripped value, or ``None`` when missing or blank.
    """
    raw = os.environ.get(name)
    if raw is None:
        return None
    return raw.strip() or None


def env_path(name: str, *, default: Path | None = None) -> Path | None:
    """Return an environment variable as a user-expanded path.

    Returns
    -------
    Path | None
        Path built from the stripped value, or ``default``.
    """
    value = env_value(name)
    if value is None:
        return default
    return Path(value).expanduser()


@overload
def env_bool(name: str) -> bool | None: ...


@overload
def env_bool(name: str, *, default: bool, log_invalid: bool = False) -> bool: ...


@overload
def env_bool(
    name: str,
    *,
    default: bool | None,
    on_invalid: OnInvalid,
    log_invalid: bool = False,
) -> bool | None: ...


def env_bool(
    name: str,
    *,
    default: bool | None = None,
    on_invalid: OnInvalid = "default",
    log_invalid: bool = False,
) -> bool | None:
    """Parse a yes/no style switch.

    ``1/true/yes/y`` and ``0/false/no/n`` are accepted in any case, which
    covers shell conventions such as ``ALLOW_TOOLCHAIN_REBUILDS=y``.

    Parameters
    ----------
    name
        Environment variable name.
    default
        Value returned when the variable is unset or blank.
    on_invalid
        ``"default"`` falls back to ``default``, ``"none"`` returns ``None``
        and ``"false"`` returns ``False`` for unrecognized values.
    log_invalid
        Emit a warning for unrecognized values.

    Returns
    -------
    bool | None
        Parsed switch value.
    """
    value = env_value(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    if log_invalid:
        _LOGGER.warning("Invalid boolean for %s: %r", name, value)
    match on_invalid:
        case "none":
            return None
        case "false":
            return False
        case _:
            return default


__all__ = ["OnInvalid", "env_bool", "env_path", "env_value"]
