"""Polymarket URL parsing.

Supported formats:
    https://polymarket.com/event/trump-2028
    https://polymarket.com/event/trump-2028?tid=123
    https://www.polymarket.com/event/trump-2028/will-trump-run
    polymarket.com/event/some-slug
"""

from __future__ import annotations

import re

from smart_money.errors import InvalidInputError

_EVENT_RE = re.compile(r"polymarket\.com/event/([^/?#]+)")
_MARKET_RE = re.compile(r"polymarket\.com/event/[^/?#]+/([^/?#]+)")


def is_polymarket_url(url: str) -> bool:
    return "polymarket.com" in url


def extract_event_slug(url: str) -> str:
    """Extract the event slug from a Polymarket URL.

    Raises:
        InvalidInputError: if the URL is not a Polymarket event URL.
    """
    trimmed = url.strip()
    if not is_polymarket_url(trimmed):
        raise InvalidInputError(
            "Invalid URL: Please enter a valid Polymarket URL "
            "(e.g. https://polymarket.com/event/...)"
        )

    match = _EVENT_RE.search(trimmed)
    if match is None:
        raise InvalidInputError(
            "Invalid URL: could not extract event slug. "
            "Expected format: https://polymarket.com/event/{slug}"
        )
    return match.group(1)


def extract_market_slug(url: str) -> str | None:
    """Extract the optional market slug following the event slug."""
    match = _MARKET_RE.search(url.strip())
    return match.group(1) if match else None
