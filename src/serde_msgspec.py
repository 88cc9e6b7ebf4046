"""Shared msgspec struct policy for build graph and report records."""

from __future__ import annotations

from pathlib import PurePath

import msgspec


class StructBaseStrict(
    msgspec.Struct,
    frozen=True,
    kw_only=True,
    omit_defaults=True,
    repr_omit_defaults=True,
    forbid_unknown_fields=True,
):
    """Base struct for immutable records with a closed field set."""


def _enc_hook(obj: object) -> object:
    if isinstance(obj, PurePath):
        return str(obj)
    msg = f"Unsupported type for builtins conversion: {type(obj)!r}"
    raise TypeError(msg)


def to_builtins(obj: object, *, str_keys: bool = True) -> object:
    """Convert records into JSON-friendly builtins with a stable key order.

    Parameters
    ----------
    obj
        Struct, mapping or sequence to convert.
    str_keys
        Coerce mapping keys to strings.

    Returns
    -------
    object
        Builtin representation.
    """
    return msgspec.to_builtins(
        obj,
        order="deterministic",
        str_keys=str_keys,
        enc_hook=_enc_hook,
    )


__all__ = ["StructBaseStrict", "to_builtins"]
