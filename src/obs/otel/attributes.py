"""Normalize OpenTelemetry attributes for build report telemetry."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import cast

from opentelemetry.util.types import AttributeValue

from utils.env_utils import env_value


def _limit_to_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


_MAX_ATTRIBUTE_LENGTH = _limit_to_int(env_value("OTEL_ATTRIBUTE_VALUE_LENGTH_LIMIT"))


def _is_scalar(value: object) -> bool:
    return isinstance(value, (str, bool, int, float))


def _truncate_str(value: str, *, value_length_limit: int | None) -> str:
    if value_length_limit is None:
        return value
    if value_length_limit <= 0:
        return ""
    return value[:value_length_limit]


def _normalize_sequence(
    values: Sequence[object], *, value_length_limit: int | None
) -> AttributeValue:
    normalized = [item for item in values if item is not None]
    if not normalized:
        return []
    if all(isinstance(item, bool) for item in normalized):
        return [bool(item) for item in normalized]
    if all(isinstance(item, int) and not isinstance(item, bool) for item in normalized):
        return [cast("int", item) for item in normalized]
    if all(isinstance(item, float) for item in normalized):
        return [cast("float", item) for item in normalized]
    return [_truncate_str(str(item), value_length_limit=value_length_limit) for item in normalized]


def _normalize_value(value: object, *, value_length_limit: int | None) -> AttributeValue:
    if _is_scalar(value):
        if isinstance(value, str):
            return _truncate_str(value, value_length_limit=value_length_limit)
        return cast("AttributeValue", value)
    if isinstance(value, Mapping):
        return _truncate_str(
            json.dumps(value, sort_keys=True, default=str),
            value_length_limit=value_length_limit,
        )
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _normalize_sequence(list(value), value_length_limit=value_length_limit)
    return _truncate_str(str(value), value_length_limit=value_length_limit)


def normalize_attributes(attrs: Mapping[str, object] | None) -> dict[str, AttributeValue]:
    """Normalize attributes for spans.

    ``None`` values are dropped, mappings are JSON encoded and sequences keep
    homogeneous scalar types.

    Returns
    -------
    dict[str, AttributeValue]
        Normalized attribute mapping with OpenTelemetry-safe values.
    """
    if not attrs:
        return {}
    return {
        str(key): _normalize_value(value, value_length_limit=_MAX_ATTRIBUTE_LENGTH)
        for key, value in attrs.items()
        if value is not None
    }


__all__ = ["normalize_attributes"]
