"""Trading signal generation from ranked, scored wallets.

Positions are weighted by credibility so that a $1,000 position from an
80-score wallet counts as $800. Confidence comes from how lopsided the
weighted split is, reduced when a single whale dominates and nudged up
when most wallets agree by count.
"""

from __future__ import annotations

import logging

from smart_money.markets.models import Outcome
from smart_money.scoring.credibility import ScoredWallet
from smart_money.signals.formatters import format_dollars, shorten_address
from smart_money.signals.models import (
    SignalData,
    SignalType,
    TradingSignal,
    WalletSummary,
    inconclusive,
)

logger = logging.getLogger(__name__)

MIN_WALLETS = 3

# (dominance strictly above, base confidence), checked in order
CONFIDENCE_BRACKETS: tuple[tuple[float, int], ...] = ((0.80, 9), (0.70, 7), (0.60, 5))
DIVIDED_CONFIDENCE = 3
DIVIDED_DOMINANCE = 0.60

WHALE_SHARE = 0.40
WHALE_PENALTY = 3

AGREEMENT_RATIO = 0.80
AGREEMENT_MIN_WALLETS = 5

BUY_YES_SHARE = 0.65
BUY_NO_SHARE = 0.35
MIN_SIGNAL_CONFIDENCE = 5


def base_confidence(dominance: float) -> int:
    for threshold, confidence in CONFIDENCE_BRACKETS:
        if dominance > threshold:
            return confidence
    return DIVIDED_CONFIDENCE


def decide_signal(yes_share: float, confidence: int) -> SignalType:
    """Apply the share thresholds and the confidence gate."""
    if confidence >= MIN_SIGNAL_CONFIDENCE:
        if yes_share >= BUY_YES_SHARE:
            return SignalType.BUY_YES
        if yes_share <= BUY_NO_SHARE:
            return SignalType.BUY_NO
    return SignalType.INCONCLUSIVE


def summarize_wallet(wallet: ScoredWallet) -> WalletSummary:
    profile = wallet.profile
    return WalletSummary(
        address=shorten_address(profile.address),
        name=profile.name,
        score=wallet.score,
        breakdown=wallet.breakdown,
        position=profile.current_position,
        size=round(profile.current_position_size, 2),
        profit=round(profile.total_profit, 2),
        win_rate=round(profile.win_rate, 1),
        total_markets=profile.total_markets,
    )


def generate_trading_signal(ranked: list[ScoredWallet]) -> TradingSignal:
    """Aggregate ranked wallets (best first) into a trading signal."""
    if len(ranked) < MIN_WALLETS:
        return inconclusive(
            f"Only {len(ranked)} wallet(s) meet the criteria. "
            f"Need at least {MIN_WALLETS} for a meaningful signal."
        )

    yes_list = [w for w in ranked if w.profile.current_position is Outcome.YES]
    no_list = [w for w in ranked if w.profile.current_position is Outcome.NO]

    yes_weighted = sum(w.weighted_value for w in yes_list)
    no_weighted = sum(w.weighted_value for w in no_list)
    total_weighted = yes_weighted + no_weighted

    yes_raw = sum(w.profile.current_position_size for w in yes_list)
    no_raw = sum(w.profile.current_position_size for w in no_list)

    if total_weighted <= 0:
        return inconclusive("Total credibility-weighted position value is $0. Cannot generate signal.")

    yes_share = yes_weighted / total_weighted
    dominance = max(yes_share, 1.0 - yes_share)

    confidence = base_confidence(dominance)

    whale = next((w for w in ranked if w.weighted_value > total_weighted * WHALE_SHARE), None)
    if whale is not None:
        confidence = max(1, confidence - WHALE_PENALTY)

    dominant_count = max(len(yes_list), len(no_list))
    if len(ranked) >= AGREEMENT_MIN_WALLETS and dominant_count / len(ranked) >= AGREEMENT_RATIO:
        confidence = min(10, confidence + 1)

    signal = decide_signal(yes_share, confidence)

    parts = [
        f"{len(yes_list)} of {len(ranked)} top wallets "
        f"({round(yes_share * 100)}% by credibility-weighted value) are in YES, "
        f"with ${format_dollars(yes_raw)} in YES positions vs "
        f"${format_dollars(no_raw)} in NO positions."
    ]
    if whale is not None:
        whale_pct = round(whale.weighted_value / total_weighted * 100)
        parts.append(
            f"⚠️ Whale Alert: One wallet controls {whale_pct}% of analyzed value "
            f"- confidence reduced."
        )
    if signal is SignalType.INCONCLUSIVE:
        if dominance < DIVIDED_DOMINANCE:
            parts.append("The market is split among smart money - no clear directional edge.")
        else:
            parts.append("Leaning signal detected but confidence threshold not met.")

    logger.info(
        "Signal %s (confidence %d): yes_share=%.3f whale=%s wallets=%d",
        signal.value, confidence, yes_share, whale is not None, len(ranked),
    )

    return TradingSignal(
        signal=signal,
        confidence=confidence,
        reasoning=" ".join(parts),
        data=SignalData(
            yes_wallets=len(yes_list),
            no_wallets=len(no_list),
            yes_value=round(yes_raw, 2),
            no_value=round(no_raw, 2),
            yes_weighted=round(yes_weighted, 2),
            no_weighted=round(no_weighted, 2),
            yes_share=round(yes_share, 3),
            whale_detected=whale is not None,
            wallets=tuple(summarize_wallet(w) for w in ranked),
        ),
    )
