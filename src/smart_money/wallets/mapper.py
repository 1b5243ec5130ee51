"""Map per-token holder listings onto YES/NO wallet positions."""

from __future__ import annotations

import logging

from smart_money.errors import InvalidMarketDataError
from smart_money.markets.models import HolderListing, MarketContext, Outcome
from smart_money.wallets.models import HolderPosition

logger = logging.getLogger(__name__)

FALLBACK_MAPPING_WARNING = (
    "Position mapping used index-based fallback for some tokens "
    "- YES/NO detection may be less accurate."
)


def _resolve_outcome_label(listing: HolderListing, index: int, market: MarketContext) -> tuple[str, bool]:
    """Return (outcome label, used_fallback) for a listing."""
    label = market.outcome_for_token.get(listing.token_id)
    if label:
        return label, False

    if index < len(market.outcomes):
        return market.outcomes[index], True
    return ("Yes" if index == 0 else "No"), True


def map_holders_to_positions(
    listings: list[HolderListing],
    market: MarketContext,
) -> tuple[list[HolderPosition], list[str]]:
    """Resolve holder listings into one position per unique wallet.

    Each listing's side comes from the market's token -> outcome map. When a
    token is missing from the map, the first listing is taken as YES and the
    rest as NO, and a mapping-quality warning is emitted.

    Share counts are converted to dollars at the resolved outcome's current
    price. An address already seen in an earlier listing keeps its first
    assignment (case-insensitive), since a wallet can show stale balances in
    both outcome listings.

    Raises:
        InvalidMarketDataError: if no listings are supplied
    """
    if not listings:
        raise InvalidMarketDataError("No holder listings supplied for this market.")

    positions: list[HolderPosition] = []
    seen: set[str] = set()
    used_fallback = False
    duplicates = 0

    for index, listing in enumerate(listings):
        label, fallback = _resolve_outcome_label(listing, index, market)
        if fallback:
            used_fallback = True
            side = Outcome.YES if index == 0 else Outcome.NO
            logger.info("Token %s not in outcome map, assuming %s", listing.token_id, side.value)
        else:
            side = Outcome.from_label(label)

        price = market.price_for_outcome(label)

        for holder in listing.holders:
            key = holder.address.lower()
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)

            shares = holder.shares or 0.0
            positions.append(
                HolderPosition(
                    address=holder.address,
                    position=side,
                    size=shares * price,
                    shares=shares,
                    name=holder.name,
                )
            )

    if duplicates:
        logger.debug("Skipped %d duplicate holder(s) across listings", duplicates)

    warnings = [FALLBACK_MAPPING_WARNING] if used_fallback else []
    return positions, warnings
