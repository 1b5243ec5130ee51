"""Test doubles and builders shared across test modules."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from smart_money.markets.models import Outcome
from smart_money.scoring.credibility import ScoreBreakdown, ScoredWallet
from smart_money.wallets.models import (
    ActivityEvent,
    LeaderboardEntry,
    WalletPosition,
    WalletProfile,
)

YES_TOKEN = "111"
NO_TOKEN = "222"


class FakeHistory:
    """In-memory WalletHistoryProvider.

    ``errors`` maps (source, address) to an exception to raise; ``delays``
    maps address to seconds to sleep before answering.
    """

    def __init__(
        self,
        leaderboard: dict[str, LeaderboardEntry] | None = None,
        positions: dict[str, list[WalletPosition]] | None = None,
        activity: dict[str, list[ActivityEvent]] | None = None,
        errors: dict[tuple[str, str], Exception] | None = None,
        delays: dict[str, float] | None = None,
    ) -> None:
        self._leaderboard = leaderboard or {}
        self._positions = positions or {}
        self._activity = activity or {}
        self._errors = errors or {}
        self._delays = delays or {}
        self.calls: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self, source: str, address: str) -> None:
        self.calls.append((source, address))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self._delays.get(address, 0))
        finally:
            self.in_flight -= 1
        error = self._errors.get((source, address))
        if error is not None:
            raise error

    async def leaderboard_entry(self, address: str) -> LeaderboardEntry | None:
        await self._enter("leaderboard", address)
        return self._leaderboard.get(address)

    async def positions(self, address: str, limit: int = 50) -> list[WalletPosition]:
        await self._enter("positions", address)
        return self._positions.get(address, [])[:limit]

    async def activity(self, address: str, limit: int = 5) -> list[ActivityEvent]:
        await self._enter("activity", address)
        return self._activity.get(address, [])[:limit]


def make_profile(
    address: str = "0xabc0000000000000000000000000000000000001",
    position: Outcome = Outcome.YES,
    size: float = 1_000.0,
    profit: float = 0.0,
    markets: int = 0,
    win_rate: float = 0.0,
    last_trade: datetime | None = None,
    avg_size: float = 0.0,
) -> WalletProfile:
    return WalletProfile(
        address=address,
        current_position=position,
        current_position_size=size,
        current_shares=size * 2,
        total_profit=profit,
        total_markets=markets,
        win_rate=win_rate,
        last_trade=last_trade or datetime(2026, 1, 1, tzinfo=timezone.utc),
        avg_position_size=avg_size,
    )


def make_scored(
    weighted: float,
    position: Outcome = Outcome.YES,
    address: str | None = None,
    score: float = 50.0,
) -> ScoredWallet:
    """A scored wallet whose weighted value is exactly ``weighted``.

    Points fill the factors in order up to each cap, so total == ``score``.
    """
    remaining = score
    parts = []
    for cap in (40.0, 25.0, 15.0, 10.0, 10.0):
        parts.append(min(cap, remaining))
        remaining -= parts[-1]
    size = weighted / (score / 100.0)
    profile = make_profile(
        address=address or f"0x{int(weighted * 100):040x}",
        position=position,
        size=size,
    )
    return ScoredWallet(profile=profile, breakdown=ScoreBreakdown(*parts))

