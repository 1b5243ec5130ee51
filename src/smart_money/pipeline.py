"""Top-level pipeline orchestrator.

Wires together: holder mapping -> profile enrichment -> qualification ->
credibility scoring -> top-N ranking -> signal generation, collecting
data-quality warnings along the way. ``analyze_url`` resolves the market and
holder listings from a Polymarket URL first.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from smart_money.common.cache import KeyValueCache, MemoryCache
from smart_money.common.http import HttpClient
from smart_money.config import Settings, get_settings
from smart_money.errors import AnalysisTimeoutError
from smart_money.markets.client import fetch_event, fetch_holders, raw_to_market_context, select_market
from smart_money.markets.models import HolderListing, MarketContext
from smart_money.markets.urls import extract_event_slug, extract_market_slug
from smart_money.scoring.credibility import rank_wallets, score_wallet
from smart_money.scoring.filters import qualify
from smart_money.signals.generator import generate_trading_signal
from smart_money.signals.models import AnalysisOutcome, inconclusive
from smart_money.wallets.base import WalletHistoryProvider
from smart_money.wallets.client import PolymarketWalletHistory
from smart_money.wallets.enricher import enrich_wallets
from smart_money.wallets.mapper import map_holders_to_positions

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Resolved market plus its analysis outcome."""

    market: MarketContext
    outcome: AnalysisOutcome


async def analyze(
    market: MarketContext,
    listings: list[HolderListing],
    history: WalletHistoryProvider,
    *,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> AnalysisOutcome:
    """Turn a market's holder listings into a trading signal.

    Insufficient data never raises: it resolves to an INCONCLUSIVE signal
    with explanatory reasoning. Warnings are returned in pipeline order.
    """
    if settings is None:
        settings = get_settings()
    if now is None:
        now = datetime.now(timezone.utc)

    warnings: list[str] = []

    if market.has_default_prices:
        # Could be a genuine 50/50 market or a price parse failure
        warnings.append("Market prices show 50/50 - this may indicate price data could not be parsed.")

    # Step 1: Map listings to one YES/NO position per wallet
    if not listings:
        warnings.append("No holder data available from the API.")
        return AnalysisOutcome(
            signal=inconclusive("No holder data available for this market."),
            warnings=warnings,
        )

    holders, mapping_warnings = map_holders_to_positions(listings, market)
    warnings.extend(mapping_warnings)
    if not holders:
        return AnalysisOutcome(
            signal=inconclusive("No holders found for this market."),
            warnings=warnings,
        )

    # Step 2: Enrich with wallet history (bounded concurrency)
    enrichment = await enrich_wallets(holders, history, settings=settings, now=now)
    warnings.extend(enrichment.warnings)
    profiles = enrichment.profiles

    # Step 3: Qualify on position size OR profit
    qualified = qualify(profiles, settings)
    if enrichment.blank_profiles > len(profiles) * 0.5:
        warnings.append(
            f"{enrichment.blank_profiles} of {len(profiles)} wallets had no historical data "
            "- scores are based primarily on position size."
        )
    logger.info("%d of %d wallet(s) qualified for scoring", len(qualified), len(profiles))

    if not qualified:
        return AnalysisOutcome(
            signal=inconclusive(
                "No wallets have sufficient position size or profit in this market. "
                f"{len(profiles)} wallets were analyzed."
            ),
            warnings=warnings,
        )

    # Step 4: Score, rank, keep top N
    scored = [
        score_wallet(p, now=now, full_weight_markets=settings.win_rate_full_weight_markets)
        for p in qualified
    ]
    ranked = rank_wallets(scored, settings.top_n)

    # Step 5: Aggregate into a signal
    return AnalysisOutcome(signal=generate_trading_signal(ranked), warnings=warnings)


async def _analyze_url(
    url: str,
    client: HttpClient,
    cache: KeyValueCache,
    settings: Settings,
    now: datetime | None,
) -> AnalysisResult:
    event_slug = extract_event_slug(url)
    market_slug = extract_market_slug(url)

    event = await fetch_event(event_slug, client, cache, settings)
    market = raw_to_market_context(select_market(event, market_slug))
    logger.info("Analyzing market %s: %s", market.market_id, market.question)

    listings = await fetch_holders(market.condition_id, client, cache, settings)
    history = PolymarketWalletHistory(client, cache, settings)
    outcome = await analyze(market, listings, history, settings=settings, now=now)
    return AnalysisResult(market=market, outcome=outcome)


async def analyze_url(
    url: str,
    *,
    cache: KeyValueCache | None = None,
    client: HttpClient | None = None,
    timeout: float | None = None,
    settings: Settings | None = None,
    now: datetime | None = None,
) -> AnalysisResult:
    """Analyze a Polymarket event URL end to end.

    The whole run is bounded by ``timeout`` (default from settings); on
    timeout the pipeline is cancelled and no partial signal is returned.

    Raises:
        InvalidInputError: malformed URL or unusable market data
        UpstreamNotFoundError: the event does not exist
        UpstreamRateLimitedError: Polymarket returned 429
        AnalysisTimeoutError: the run exceeded ``timeout``
    """
    if settings is None:
        settings = get_settings()
    if cache is None:
        cache = MemoryCache()
    if timeout is None:
        timeout = settings.analysis_timeout

    owns_client = client is None
    if client is None:
        client = HttpClient(timeout=settings.http_timeout)

    try:
        return await asyncio.wait_for(
            _analyze_url(url, client, cache, settings, now),
            timeout=timeout,
        )
    except asyncio.TimeoutError as exc:
        raise AnalysisTimeoutError(
            f"Analysis timed out after {timeout:.0f}s. Please try again."
        ) from exc
    finally:
        if owns_client:
            await client.close()
