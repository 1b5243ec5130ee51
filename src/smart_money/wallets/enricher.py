"""Wallet profile enrichment from three unreliable history sources.

For each holder, the leaderboard row, recent positions and recent activity
are fetched concurrently and reconciled into a WalletProfile. A failing
source only removes its own contribution; wallets are enriched in
fixed-size concurrent batches to stay under Data API rate limits.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, TypeVar

from smart_money.common.types import EPOCH_ZERO, parse_timestamp
from smart_money.config import Settings, get_settings
from smart_money.wallets.base import WalletHistoryProvider
from smart_money.wallets.models import (
    ActivityEvent,
    HolderPosition,
    LeaderboardEntry,
    WalletPosition,
    WalletProfile,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class EnrichmentResult:
    """Enriched profiles in input order, plus data-quality counts."""

    profiles: list[WalletProfile]
    blank_profiles: int = 0
    failed_wallets: int = 0
    warnings: list[str] = field(default_factory=list)


async def _fetch_soft(source: Awaitable[T], default: T, name: str, address: str) -> T:
    """Await one history source, mapping any failure to ``default``."""
    try:
        return await source
    except Exception as exc:
        logger.debug("%s fetch failed for %s: %s", name, address, exc)
        return default


def _last_trade(activity: list[ActivityEvent], has_positions: bool, now: datetime) -> datetime:
    for event in activity:
        parsed = parse_timestamp(event.timestamp)
        if parsed is not None:
            return parsed
    # Open positions without visible activity: treat as recently active
    if has_positions:
        return now
    return EPOCH_ZERO


def build_profile(
    holder: HolderPosition,
    leaderboard: LeaderboardEntry | None,
    positions: list[WalletPosition],
    activity: list[ActivityEvent],
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> WalletProfile:
    """Reconcile the three history sources into one profile.

    - Profit: the leaderboard PnL if the row belongs to this wallet,
      otherwise the summed position PnL (zeroed past the sanity ceiling).
    - Markets: leaderboard market count, else number of sampled positions.
    - Win rate: share of sampled positions with positive PnL.
    - Average size: mean |initial or current value|, zeroed past its ceiling.
    - Last trade: newest parseable activity timestamp, else now if the
      wallet holds positions, else epoch zero.
    """
    if settings is None:
        settings = get_settings()
    if now is None:
        now = datetime.now(timezone.utc)

    entry = leaderboard if leaderboard is not None and leaderboard.matches(holder.address) else None

    total_profit = 0.0
    if entry is not None:
        total_profit = entry.pnl
    elif positions:
        raw_pnl = sum(p.cash_pnl for p in positions)
        if abs(raw_pnl) < settings.pnl_sanity_ceiling:
            total_profit = raw_pnl
        else:
            logger.debug("Discarding implausible PnL %.0f for %s", raw_pnl, holder.address)

    total_markets = (entry.markets_traded if entry is not None else 0) or len(positions)

    win_rate = 0.0
    avg_position_size = 0.0
    if positions:
        wins = sum(1 for p in positions if p.cash_pnl > 0)
        win_rate = wins / len(positions) * 100.0

        avg_position_size = sum(
            abs(p.initial_value or p.current_value) for p in positions
        ) / len(positions)
        # Above the ceiling this is almost certainly raw shares, not dollars
        if avg_position_size > settings.avg_size_sanity_ceiling:
            avg_position_size = 0.0

    return WalletProfile(
        address=holder.address,
        name=holder.name,
        current_position=holder.position,
        current_position_size=holder.size,
        current_shares=holder.shares,
        total_profit=total_profit,
        total_volume=entry.volume if entry is not None else 0.0,
        total_markets=total_markets,
        win_rate=win_rate,
        sampled_positions=len(positions),
        last_trade=_last_trade(activity, bool(positions), now),
        avg_position_size=avg_position_size,
    )


async def enrich_wallet(
    holder: HolderPosition,
    history: WalletHistoryProvider,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> WalletProfile:
    """Fetch all three history sources for one wallet concurrently."""
    if settings is None:
        settings = get_settings()

    address = holder.address
    leaderboard, positions, activity = await asyncio.gather(
        _fetch_soft(history.leaderboard_entry(address), None, "leaderboard", address),
        _fetch_soft(history.positions(address, settings.positions_limit), [], "positions", address),
        _fetch_soft(history.activity(address, settings.activity_limit), [], "activity", address),
    )
    return build_profile(
        holder,
        leaderboard,
        positions[: settings.positions_limit],
        activity[: settings.activity_limit],
        settings=settings,
        now=now,
    )


async def enrich_wallets(
    holders: list[HolderPosition],
    history: WalletHistoryProvider,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> EnrichmentResult:
    """Enrich wallets in fixed-size concurrent batches.

    Results preserve input order regardless of completion order. A wallet
    whose enrichment fails outright degrades to a profile with no history.
    """
    if settings is None:
        settings = get_settings()

    batch_size = settings.enrichment_concurrency
    profiles: list[WalletProfile] = []
    failed = 0

    for start in range(0, len(holders), batch_size):
        batch = holders[start:start + batch_size]
        results = await asyncio.gather(
            *(enrich_wallet(h, history, settings=settings, now=now) for h in batch),
            return_exceptions=True,
        )
        for holder, result in zip(batch, results):
            if isinstance(result, Exception):
                failed += 1
                logger.warning("Enrichment failed for %s: %s", holder.address, result)
                result = build_profile(holder, None, [], [], settings=settings, now=now)
            elif isinstance(result, BaseException):
                raise result
            profiles.append(result)

    blank = sum(1 for p in profiles if p.is_blank)
    warnings: list[str] = []
    if blank:
        warnings.append(f"{blank} of {len(holders)} wallets had incomplete profile data.")

    logger.info("Enriched %d wallet(s): %d blank, %d failed", len(profiles), blank, failed)
    return EnrichmentResult(
        profiles=profiles,
        blank_profiles=blank,
        failed_wallets=failed,
        warnings=warnings,
    )
