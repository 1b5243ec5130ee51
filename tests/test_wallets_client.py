"""Tests for the Data API wallet-history client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from smart_money.common.cache import MemoryCache
from smart_money.config import Settings
from smart_money.wallets.client import (
    PolymarketWalletHistory,
    normalize_leaderboard_payload,
    raw_to_leaderboard_entry,
    raw_to_position,
)

ADDR = "0xAbCdEf0000000000000000000000000000000001"


def _history(**kwargs) -> tuple[PolymarketWalletHistory, MagicMock]:
    client = MagicMock()
    client.get_json = AsyncMock(**kwargs)
    return PolymarketWalletHistory(client, MemoryCache()), client


class TestNormalizeLeaderboard:
    def test_bare_list(self):
        assert normalize_leaderboard_payload([{"pnl": 1}]) == [{"pnl": 1}]

    def test_wrapped_object(self):
        assert normalize_leaderboard_payload({"leaderboard": [{"pnl": 1}]}) == [{"pnl": 1}]

    @pytest.mark.parametrize("payload", [None, "oops", {"leaderboard": "x"}, {}, 42])
    def test_garbage(self, payload):
        assert normalize_leaderboard_payload(payload) == []


class TestRawToLeaderboardEntry:
    def test_alternate_field_names(self):
        entry = raw_to_leaderboard_entry(
            {"proxyWallet": ADDR, "profit": "1500.5", "volume": 20_000, "markets": "12"}
        )
        assert entry is not None
        assert entry.pnl == pytest.approx(1500.5)
        assert entry.volume == 20_000
        assert entry.markets_traded == 12

    def test_missing_pnl_reads_as_zero(self):
        entry = raw_to_leaderboard_entry({"proxyWallet": ADDR, "vol": 5, "marketsTraded": 31})
        assert entry.pnl == 0.0
        assert entry.volume == 5
        assert entry.markets_traded == 31


def test_raw_to_position_defaults():
    pos = raw_to_position({"cashPnl": "12.5", "initialValue": None, "size": 30})
    assert pos.cash_pnl == 12.5
    assert pos.initial_value == 0.0
    assert pos.size == 30


@pytest.mark.asyncio
async def test_leaderboard_entry_for_matching_wallet():
    history, client = _history(
        return_value=[{"proxyWallet": ADDR.lower(), "pnl": 42_000, "vol": 1e6, "marketsTraded": 80}]
    )
    entry = await history.leaderboard_entry(ADDR)

    assert entry is not None
    assert entry.pnl == 42_000
    assert entry.markets_traded == 80
    params = client.get_json.await_args.kwargs["params"]
    assert params["userAddress"] == ADDR
    assert params["limit"] == 1


@pytest.mark.asyncio
async def test_leaderboard_entry_for_other_wallet_discarded():
    history, _ = _history(
        return_value={"leaderboard": [{"proxyWallet": "0xtoptrader", "pnl": 9e6}]}
    )
    assert await history.leaderboard_entry(ADDR) is None


@pytest.mark.asyncio
async def test_leaderboard_entry_cached():
    history, client = _history(return_value=[{"proxyWallet": ADDR, "pnl": 1}])
    await history.leaderboard_entry(ADDR)
    await history.leaderboard_entry(ADDR.lower())
    client.get_json.assert_awaited_once()


@pytest.mark.asyncio
async def test_positions_fail_soft():
    history, _ = _history(side_effect=httpx.ConnectError("down"))
    assert await history.positions(ADDR) == []


@pytest.mark.asyncio
async def test_positions_parsed_and_limited():
    payload = [{"cashPnl": i, "initialValue": 10} for i in range(60)]
    history, client = _history(return_value=payload)
    positions = await history.positions(ADDR, limit=50)

    assert len(positions) == 50
    assert client.get_json.await_args.kwargs["params"]["sortBy"] == "CURRENT"


@pytest.mark.asyncio
async def test_activity_non_list_payload():
    history, _ = _history(return_value={"error": "not found"})
    assert await history.activity(ADDR) == []


@pytest.mark.asyncio
async def test_activity_parsed():
    history, _ = _history(return_value=[{"timestamp": 1767225600, "type": "TRADE"}])
    events = await history.activity(ADDR)
    assert events[0].timestamp == 1767225600
    assert events[0].kind == "TRADE"


@pytest.mark.asyncio
async def test_malformed_json_fails_soft():
    history, _ = _history(side_effect=ValueError("Expecting value"))
    assert await history.leaderboard_entry(ADDR) is None


@pytest.mark.asyncio
async def test_leaderboard_row_without_pnl_is_kept():
    history, _ = _history(return_value=[{"proxyWallet": ADDR, "vol": 800, "marketsTraded": 44}])
    entry = await history.leaderboard_entry(ADDR)

    assert entry is not None
    assert entry.pnl == 0.0
    assert entry.markets_traded == 44


@pytest.mark.asyncio
async def test_injected_settings_drive_urls_and_ttl():
    clock = [0.0]
    client = MagicMock()
    client.get_json = AsyncMock(return_value=[{"proxyWallet": ADDR, "pnl": 10}])
    cache = MemoryCache(clock=lambda: clock[0])
    history = PolymarketWalletHistory(
        client, cache, Settings(data_api_url="http://data.test", profile_cache_ttl=5),
    )

    await history.leaderboard_entry(ADDR)
    assert client.get_json.await_args.args[0] == "http://data.test/v1/leaderboard"

    clock[0] = 6.0
    await history.leaderboard_entry(ADDR)
    assert client.get_json.await_count == 2
