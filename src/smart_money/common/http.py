"""Shared async HTTP client with retry."""

from __future__ import annotations

from typing import NoReturn

import httpx
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception

from smart_money.config import get_settings
from smart_money.errors import UpstreamError, UpstreamNotFoundError, UpstreamRateLimitedError


def _is_retryable(exc: BaseException) -> bool:
    """Retry on timeouts and transient server errors. 429 is surfaced, never retried."""
    if isinstance(exc, httpx.TimeoutException):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in (500, 502, 503, 504)
    return False


_retry_decorator = retry(
    retry=retry_if_exception(_is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
    reraise=True,
)


class HttpClient:
    """Async HTTP client with retry logic."""

    def __init__(
        self,
        base_url: str = "",
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        if timeout is None:
            timeout = get_settings().http_timeout
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers or {"User-Agent": "smart-money-analyzer/0.1"},
            timeout=httpx.Timeout(timeout),
        )

    @_retry_decorator
    async def get(self, url: str, params: dict | None = None) -> httpx.Response:
        resp = await self._client.get(url, params=params)
        resp.raise_for_status()
        return resp

    async def get_json(self, url: str, params: dict | None = None) -> object:
        resp = await self.get(url, params=params)
        return resp.json()

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def raise_upstream_error(exc: httpx.HTTPError, what: str) -> NoReturn:
    """Translate a fatal httpx failure into the analyzer's error taxonomy.

    ``what`` names the resource in lower case, e.g. ``"event 'trump-2028'"``.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status == 404:
            raise UpstreamNotFoundError(
                f"{what[:1].upper()}{what[1:]} not found. Please check the URL."
            ) from exc
        if status == 429:
            raise UpstreamRateLimitedError() from exc
        raise UpstreamError(f"Failed to fetch {what}: HTTP {status}") from exc
    raise UpstreamError(f"Failed to fetch {what}: {exc}") from exc
