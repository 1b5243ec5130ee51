"""Ordered candidate-field extraction for loosely shaped API payloads.

Polymarket endpoints are inconsistent about field names (``pnl`` vs
``profit``, ``vol`` vs ``volume``) and types (numbers vs numeric strings).
Extractors try each candidate key in order and return ``ABSENT`` rather
than raising when none yields a usable value.
"""

from __future__ import annotations

import math
from typing import Callable, Final, Mapping, TypeVar

T = TypeVar("T")


class _Absent:
    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Final = _Absent()


def _to_float(value: object) -> float | _Absent:
    if value is None or isinstance(value, bool):
        return ABSENT
    try:
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return ABSENT
    if math.isnan(result) or math.isinf(result):
        return ABSENT
    return result


def _to_int(value: object) -> int | _Absent:
    number = _to_float(value)
    if number is ABSENT:
        return ABSENT
    return int(number)  # type: ignore[arg-type]


def _to_str(value: object) -> str | _Absent:
    if isinstance(value, str) and value:
        return value
    return ABSENT


def first_of(
    data: Mapping[str, object],
    keys: tuple[str, ...],
    convert: Callable[[object], T | _Absent],
) -> T | _Absent:
    """Return the first candidate key whose value converts successfully."""
    for key in keys:
        if key not in data:
            continue
        value = convert(data[key])
        if value is not ABSENT:
            return value
    return ABSENT


def first_float(data: Mapping[str, object], *keys: str) -> float | _Absent:
    return first_of(data, keys, _to_float)


def first_int(data: Mapping[str, object], *keys: str) -> int | _Absent:
    return first_of(data, keys, _to_int)


def first_str(data: Mapping[str, object], *keys: str) -> str | _Absent:
    return first_of(data, keys, _to_str)


def or_default(value: T | _Absent, default: T) -> T:
    """Collapse ``ABSENT`` to a default."""
    return default if value is ABSENT else value  # type: ignore[return-value]
