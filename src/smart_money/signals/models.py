"""Signal data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from smart_money.markets.models import Outcome
from smart_money.scoring.credibility import ScoreBreakdown


class SignalType(Enum):
    """Directional call produced by the signal generator."""

    BUY_YES = "BUY YES"
    BUY_NO = "BUY NO"
    INCONCLUSIVE = "INCONCLUSIVE"


@dataclass(frozen=True)
class WalletSummary:
    """Display row for one ranked wallet."""

    address: str
    score: float
    breakdown: ScoreBreakdown
    position: Outcome
    size: float
    profit: float
    win_rate: float
    total_markets: int
    name: str | None = None


@dataclass(frozen=True)
class SignalData:
    """Aggregates behind a signal.

    Attributes:
        yes_wallets / no_wallets: ranked wallet counts per side
        yes_value / no_value: raw (unweighted) dollar totals per side
        yes_weighted / no_weighted: credibility-weighted dollar totals
        yes_share: weighted YES share of the weighted total (0-1)
        whale_detected: one wallet holds > 40% of the weighted total
        wallets: ranked wallet summaries, best first
    """

    yes_wallets: int
    no_wallets: int
    yes_value: float
    no_value: float
    yes_weighted: float
    no_weighted: float
    yes_share: float
    whale_detected: bool
    wallets: tuple[WalletSummary, ...] = ()


@dataclass(frozen=True)
class TradingSignal:
    """A confidence-rated directional call for one market.

    Attributes:
        signal: BUY_YES, BUY_NO or INCONCLUSIVE
        confidence: integer 0-10
        reasoning: human-readable explanation
        data: aggregates, absent when there was too little data to compute them
    """

    signal: SignalType
    confidence: int
    reasoning: str
    data: SignalData | None = None


@dataclass
class AnalysisOutcome:
    """Signal plus the ordered data-quality warnings collected on the way."""

    signal: TradingSignal
    warnings: list[str] = field(default_factory=list)


def inconclusive(reasoning: str) -> TradingSignal:
    """An INCONCLUSIVE signal with zero confidence and no aggregates."""
    return TradingSignal(signal=SignalType.INCONCLUSIVE, confidence=0, reasoning=reasoning)
