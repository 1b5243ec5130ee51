"""Shared timestamp helpers."""

from __future__ import annotations

from datetime import datetime, timezone

# "Unknown" last-trade time: scores as maximally stale
EPOCH_ZERO = datetime.fromtimestamp(0, tz=timezone.utc)

# Numeric timestamps above this are epoch milliseconds
_MILLIS_THRESHOLD = 1e12


def parse_timestamp(value: object) -> datetime | None:
    """Parse an epoch-seconds, epoch-milliseconds or ISO-8601 timestamp.

    Numeric strings are treated as numbers. Returns None when the value
    cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            try:
                parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                return None
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed

    if isinstance(value, (int, float)):
        seconds = value / 1000.0 if value > _MILLIS_THRESHOLD else float(value)
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    return None
