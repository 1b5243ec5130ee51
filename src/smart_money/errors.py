"""Error hierarchy for the analyzer.

Every error carries the HTTP status the request handler maps it to.
Unreliable upstream *values* are never raised; they are zeroed during
enrichment and surfaced as warnings instead.
"""

from __future__ import annotations


class SmartMoneyError(Exception):
    """Base exception for all analyzer errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(SmartMoneyError):
    """Malformed or unsupported source URL."""

    status_code = 400


class InvalidMarketDataError(InvalidInputError):
    """Market data is missing or unusable (no markets, no holder listings)."""


class UpstreamError(SmartMoneyError):
    """An upstream Polymarket API call failed."""

    status_code = 500


class UpstreamNotFoundError(UpstreamError):
    """The requested event or market does not exist upstream."""

    status_code = 404


class UpstreamRateLimitedError(UpstreamError):
    """Upstream returned HTTP 429."""

    status_code = 429

    def __init__(
        self,
        message: str = "Rate limited by Polymarket API. Please wait 1 minute and try again.",
    ) -> None:
        super().__init__(message)


class AnalysisTimeoutError(SmartMoneyError):
    """The whole analysis exceeded its time budget and was aborted."""
