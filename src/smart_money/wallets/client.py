"""Polymarket Data API wallet-history client.

Every fetch fails soft: HTTP errors and malformed payloads yield ``None`` or
an empty list, because a wallet's missing history only degrades its score.
"""

from __future__ import annotations

import logging

import httpx

from smart_money.common.cache import KeyValueCache, MemoryCache
from smart_money.common.fields import first_float, first_int, first_str, or_default
from smart_money.common.http import HttpClient
from smart_money.config import Settings, get_settings
from smart_money.wallets.models import ActivityEvent, LeaderboardEntry, WalletPosition

logger = logging.getLogger(__name__)


def normalize_leaderboard_payload(payload: object) -> list[dict]:
    """The leaderboard returns either a bare list or ``{"leaderboard": [...]}``."""
    if isinstance(payload, list):
        entries = payload
    elif isinstance(payload, dict):
        entries = payload.get("leaderboard") or []
        if not isinstance(entries, list):
            return []
    else:
        return []
    return [e for e in entries if isinstance(e, dict)]


def raw_to_leaderboard_entry(raw: dict) -> LeaderboardEntry:
    """Build an entry; missing PnL reads as 0, keeping volume and market count."""
    return LeaderboardEntry(
        wallet=or_default(first_str(raw, "proxyWallet", "userAddress", "address"), ""),
        pnl=or_default(first_float(raw, "pnl", "profit"), 0.0),
        volume=or_default(first_float(raw, "vol", "volume"), 0.0),
        markets_traded=max(0, or_default(first_int(raw, "marketsTraded", "markets"), 0)),
    )


def raw_to_position(raw: dict) -> WalletPosition:
    return WalletPosition(
        condition_id=or_default(first_str(raw, "conditionId"), ""),
        title=or_default(first_str(raw, "title"), ""),
        size=or_default(first_float(raw, "size"), 0.0),
        initial_value=or_default(first_float(raw, "initialValue"), 0.0),
        current_value=or_default(first_float(raw, "currentValue"), 0.0),
        cash_pnl=or_default(first_float(raw, "cashPnl", "pnl"), 0.0),
    )


def raw_to_activity(raw: dict) -> ActivityEvent:
    return ActivityEvent(
        timestamp=raw.get("timestamp"),
        kind=or_default(first_str(raw, "type"), ""),
    )


class PolymarketWalletHistory:
    """Wallet-history provider backed by the Polymarket Data API."""

    def __init__(
        self,
        client: HttpClient,
        cache: KeyValueCache | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._client = client
        self._cache = cache if cache is not None else MemoryCache()
        self._settings = settings if settings is not None else get_settings()

    async def _get_list(self, path: str, params: dict, address: str) -> object | None:
        try:
            return await self._client.get_json(f"{self._settings.data_api_url}{path}", params=params)
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Data API %s failed for %s: %s", path, address, exc)
            return None

    async def leaderboard_entry(self, address: str) -> LeaderboardEntry | None:
        """Fetch the wallet's all-time leaderboard row.

        The leaderboard may ignore ``userAddress`` and return the global top
        trader instead; a row for a different wallet is discarded.
        """
        cache_key = f"leaderboard:{address.lower()}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        payload = await self._get_list(
            "/v1/leaderboard",
            {
                "category": "OVERALL",
                "timePeriod": "ALL",
                "orderBy": "PNL",
                "userAddress": address,
                "limit": 1,
            },
            address,
        )
        entries = normalize_leaderboard_payload(payload)
        if not entries:
            return None

        entry = raw_to_leaderboard_entry(entries[0])
        if not entry.matches(address):
            logger.debug("Leaderboard returned %s for %s, discarding", entry.wallet, address)
            return None

        self._cache.set(cache_key, entry, self._settings.profile_cache_ttl)
        return entry

    async def positions(self, address: str, limit: int = 50) -> list[WalletPosition]:
        cache_key = f"positions:{address.lower()}:{limit}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached  # type: ignore[return-value]

        payload = await self._get_list(
            "/positions",
            {
                "user": address,
                "sortBy": "CURRENT",
                "sortDirection": "DESC",
                "limit": limit,
                "sizeThreshold": 0,
            },
            address,
        )
        if not isinstance(payload, list):
            return []

        positions = [raw_to_position(p) for p in payload[:limit] if isinstance(p, dict)]
        self._cache.set(cache_key, positions, self._settings.profile_cache_ttl)
        return positions

    async def activity(self, address: str, limit: int = 5) -> list[ActivityEvent]:
        payload = await self._get_list(
            "/activity",
            {
                "user": address,
                "limit": limit,
                "sortBy": "TIMESTAMP",
                "sortDirection": "DESC",
            },
            address,
        )
        if not isinstance(payload, list):
            return []
        return [raw_to_activity(a) for a in payload[:limit] if isinstance(a, dict)]
