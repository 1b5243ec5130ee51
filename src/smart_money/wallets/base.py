"""Wallet-history provider protocol consumed by the profile enricher."""

from __future__ import annotations

from typing import Protocol

from smart_money.wallets.models import ActivityEvent, LeaderboardEntry, WalletPosition


class WalletHistoryProvider(Protocol):
    """Three independent, individually optional history sources per wallet.

    Implementations may raise; the enricher maps any failure to an absent
    result for that source only.
    """

    async def leaderboard_entry(self, address: str) -> LeaderboardEntry | None:
        """At most one leaderboard row for the wallet."""
        ...

    async def positions(self, address: str, limit: int = 50) -> list[WalletPosition]:
        """Up to ``limit`` most recent positions."""
        ...

    async def activity(self, address: str, limit: int = 5) -> list[ActivityEvent]:
        """Up to ``limit`` most recent activity events, newest first."""
        ...
