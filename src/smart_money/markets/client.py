"""Polymarket Gamma (events) and Data API (holders) client, read-only."""

from __future__ import annotations

import json
import logging

import httpx

from smart_money.common.cache import KeyValueCache
from smart_money.common.fields import first_float, first_str, or_default
from smart_money.common.http import HttpClient, raise_upstream_error
from smart_money.config import Settings, get_settings
from smart_money.errors import InvalidMarketDataError
from smart_money.markets.models import HolderListing, MarketContext, RawHolder

logger = logging.getLogger(__name__)


def _parse_json_list(raw: object, field_name: str, market_id: str) -> list | None:
    """Parse a Gamma JSON-string list field like ``'["Yes","No"]'``."""
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, str) or not raw:
        return None
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        logger.debug("Failed to parse %s for market %s", field_name, market_id)
        return None
    return parsed if isinstance(parsed, list) else None


def raw_to_market_context(raw: dict) -> MarketContext:
    """Convert a raw Gamma market dict to a MarketContext.

    Outcomes default to Yes/No and prices to 50/50 when their JSON-string
    fields cannot be parsed.
    """
    market_id = str(raw.get("id", ""))

    outcomes = ["Yes", "No"]
    parsed_outcomes = _parse_json_list(raw.get("outcomes"), "outcomes", market_id)
    if parsed_outcomes:
        outcomes = [str(o) for o in parsed_outcomes]

    prices = [0.5, 0.5]
    parsed_prices = _parse_json_list(raw.get("outcomePrices"), "outcomePrices", market_id)
    if parsed_prices:
        try:
            prices = [float(p) for p in parsed_prices]
        except (TypeError, ValueError):
            logger.debug("Non-numeric outcomePrices for market %s", market_id)

    if any(not 0.0 <= p <= 1.0 for p in prices):
        logger.warning("Market %s has out-of-range prices %s, defaulting to 0.5", market_id, prices)
        prices = [0.5] * len(prices)

    token_ids = [
        str(t) for t in (_parse_json_list(raw.get("clobTokenIds"), "clobTokenIds", market_id) or [])
    ]
    outcome_for_token = {token: outcome for token, outcome in zip(token_ids, outcomes)}

    return MarketContext(
        market_id=market_id,
        question=raw.get("question", "") or "",
        condition_id=raw.get("conditionId", raw.get("condition_id", "")) or "",
        slug=raw.get("slug", "") or "",
        outcomes=outcomes,
        outcome_prices=prices,
        clob_token_ids=token_ids,
        outcome_for_token=outcome_for_token,
        volume=or_default(first_float(raw, "volume", "volumeNum"), 0.0),
        liquidity=or_default(first_float(raw, "liquidity", "liquidityNum"), 0.0),
        active=bool(raw.get("active", True)),
        closed=bool(raw.get("closed", False)),
        end_date=raw.get("endDate", "") or "",
    )


def select_market(event: dict, market_slug: str | None = None) -> dict:
    """Pick the market named by ``market_slug``, else the event's first market."""
    markets = event.get("markets") or []
    if not markets:
        raise InvalidMarketDataError("No markets found for this event.")

    if market_slug:
        for market in markets:
            if market.get("slug") == market_slug:
                return market
        logger.info("Market slug %r not in event, using first market", market_slug)
    return markets[0]


def raw_to_holder_listings(payload: object) -> list[HolderListing]:
    """Convert the Data API ``/holders`` payload to holder listings.

    Holders without a wallet address are skipped; missing share counts
    read as 0.
    """
    if not isinstance(payload, list):
        return []

    listings: list[HolderListing] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        holders: list[RawHolder] = []
        for raw_holder in item.get("holders") or []:
            if not isinstance(raw_holder, dict):
                continue
            address = first_str(raw_holder, "proxyWallet", "address")
            if not address:
                continue
            name = first_str(raw_holder, "name", "pseudonym", "username")
            holders.append(
                RawHolder(
                    address=address,
                    shares=or_default(first_float(raw_holder, "amount", "shares"), 0.0),
                    name=or_default(name, None),
                )
            )
        listings.append(HolderListing(token_id=str(item.get("token", "")), holders=holders))
    return listings


async def fetch_event(
    slug: str,
    client: HttpClient,
    cache: KeyValueCache,
    settings: Settings | None = None,
) -> dict:
    """Fetch a Gamma event (with all its markets) by slug.

    Raises:
        UpstreamNotFoundError: the event does not exist
        UpstreamRateLimitedError: Gamma returned 429
        UpstreamError: any other failure
    """
    if settings is None:
        settings = get_settings()
    cache_key = f"event:{slug}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached  # type: ignore[return-value]

    try:
        data = await client.get_json(f"{settings.gamma_api_url}/events/slug/{slug}")
    except httpx.HTTPError as exc:
        raise_upstream_error(exc, f"event '{slug}'")

    if not isinstance(data, dict):
        raise InvalidMarketDataError(f"Unexpected event payload for '{slug}'.")

    cache.set(cache_key, data, settings.market_cache_ttl)
    return data


async def fetch_holders(
    condition_id: str,
    client: HttpClient,
    cache: KeyValueCache,
    settings: Settings | None = None,
) -> list[HolderListing]:
    """Fetch the top holders of each outcome token for a market.

    The Data API caps this at a fixed page size per token.
    """
    if settings is None:
        settings = get_settings()
    cache_key = f"holders:{condition_id}"
    cached = cache.get(cache_key)
    if cached is not None:
        return raw_to_holder_listings(cached)

    try:
        data = await client.get_json(
            f"{settings.data_api_url}/holders",
            params={
                "market": condition_id,
                "limit": settings.holders_limit,
                "minBalance": 1,
            },
        )
    except httpx.HTTPError as exc:
        raise_upstream_error(exc, f"holders for market {condition_id}")

    payload = data if isinstance(data, list) else []
    cache.set(cache_key, payload, settings.holders_cache_ttl)
    return raw_to_holder_listings(payload)
