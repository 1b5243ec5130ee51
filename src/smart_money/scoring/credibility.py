"""Credibility scoring: wallet profile -> 0-100 score.

Five independent factors, each clamped to its own maximum:

    1. Profit magnitude  (40) - log scale, 13 * log10(profit / $1K).
       $5K ~ 9 pts, $50K ~ 22 pts, $500K ~ 35 pts, ~$1.2M+ capped at 40.
    2. Win rate          (25) - discounted until the wallet has traded
       enough markets for full weight.
    3. Trading volume    (15) - ramps up to 20 markets, full through 200,
       reduced above that (likely automated).
    4. Recency           (10) - step function of days since last trade.
    5. Conviction        (10) - current position vs. historical average;
       a bet twice their average earns full points.

Scoring is pure: the same profile and ``now`` always give the same result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone

from smart_money.wallets.models import WalletProfile

PROFIT_MAX = 40.0
WIN_RATE_MAX = 25.0
VOLUME_MAX = 15.0
RECENCY_MAX = 10.0
CONVICTION_MAX = 10.0

PROFIT_LOG_SCALE = 13.0
PROFIT_BASE = 1_000.0

DEFAULT_FULL_WEIGHT_MARKETS = 20

VOLUME_SWEET_SPOT_LOW = 20
VOLUME_SWEET_SPOT_HIGH = 200
VOLUME_OVERACTIVE_SCORE = 12.0

# (max days since last trade, points), checked in order
RECENCY_STEPS: tuple[tuple[int, float], ...] = ((7, 10.0), (30, 7.0), (90, 4.0))


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-factor credibility points."""

    profit: float = 0.0
    win_rate: float = 0.0
    volume: float = 0.0
    recency: float = 0.0
    conviction: float = 0.0

    @property
    def total(self) -> float:
        return round(self.profit + self.win_rate + self.volume + self.recency + self.conviction, 2)

    def to_dict(self) -> dict[str, float]:
        return {
            "profit": self.profit,
            "winRate": self.win_rate,
            "volume": self.volume,
            "recency": self.recency,
            "conviction": self.conviction,
        }


@dataclass(frozen=True)
class ScoredWallet:
    """A wallet profile with its credibility score attached."""

    profile: WalletProfile
    breakdown: ScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.total

    @property
    def weighted_value(self) -> float:
        """Current position size scaled by credibility (score / 100)."""
        return self.profile.current_position_size * (self.score / 100.0)


def _clamp(value: float, upper: float) -> float:
    return min(upper, max(0.0, value))


def profit_score(total_profit: float) -> float:
    if total_profit <= 0:
        return 0.0
    raw = math.log10(total_profit / PROFIT_BASE) * PROFIT_LOG_SCALE
    return round(_clamp(raw, PROFIT_MAX), 2)


def win_rate_score(
    win_rate: float,
    total_markets: int,
    full_weight_markets: int = DEFAULT_FULL_WEIGHT_MARKETS,
) -> float:
    if total_markets <= 0:
        return 0.0
    sample_weight = min(1.0, total_markets / full_weight_markets)
    raw = (win_rate / 100.0) * WIN_RATE_MAX * sample_weight
    return round(_clamp(raw, WIN_RATE_MAX), 2)


def volume_score(total_markets: int) -> float:
    if total_markets <= 0:
        return 0.0
    if total_markets < VOLUME_SWEET_SPOT_LOW:
        return round(total_markets / VOLUME_SWEET_SPOT_LOW * VOLUME_MAX, 2)
    if total_markets <= VOLUME_SWEET_SPOT_HIGH:
        return VOLUME_MAX
    return VOLUME_OVERACTIVE_SCORE


def recency_score(last_trade: datetime | None, now: datetime | None = None) -> float:
    """Unknown or future trade times get the benefit of the doubt."""
    if now is None:
        now = datetime.now(timezone.utc)
    if last_trade is None:
        return RECENCY_MAX
    if last_trade.tzinfo is None:
        last_trade = last_trade.replace(tzinfo=timezone.utc)
    if last_trade > now:
        return RECENCY_MAX

    days_since = (now - last_trade).days
    for max_days, points in RECENCY_STEPS:
        if days_since <= max_days:
            return points
    return 0.0


def conviction_score(current_size: float, avg_size: float) -> float:
    if current_size <= 0 or avg_size <= 0:
        return 0.0
    return round(min(CONVICTION_MAX, current_size / avg_size * 5.0), 2)


def score_breakdown(
    profile: WalletProfile,
    *,
    now: datetime | None = None,
    full_weight_markets: int = DEFAULT_FULL_WEIGHT_MARKETS,
) -> ScoreBreakdown:
    return ScoreBreakdown(
        profit=profit_score(profile.total_profit),
        win_rate=win_rate_score(profile.win_rate, profile.total_markets, full_weight_markets),
        volume=volume_score(profile.total_markets),
        recency=recency_score(profile.last_trade, now),
        conviction=conviction_score(profile.current_position_size, profile.avg_position_size),
    )


def score_wallet(
    profile: WalletProfile,
    *,
    now: datetime | None = None,
    full_weight_markets: int = DEFAULT_FULL_WEIGHT_MARKETS,
) -> ScoredWallet:
    """Score a single wallet profile."""
    return ScoredWallet(
        profile=profile,
        breakdown=score_breakdown(profile, now=now, full_weight_markets=full_weight_markets),
    )


def rank_wallets(scored: list[ScoredWallet], top_n: int) -> list[ScoredWallet]:
    """Sort by score (descending, stable) and keep the top ``top_n``."""
    return sorted(scored, key=lambda w: w.score, reverse=True)[:top_n]
