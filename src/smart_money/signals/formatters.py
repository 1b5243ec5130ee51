"""Signal output formatters: Rich table and JSON payloads."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from smart_money.markets.models import MarketContext
from smart_money.scoring.credibility import ScoreBreakdown
from smart_money.signals.models import AnalysisOutcome, SignalData, SignalType, TradingSignal, WalletSummary


def shorten_address(address: str) -> str:
    """``0x1234567890abcdef`` -> ``0x1234...cdef``."""
    if not address or len(address) < 10:
        return address
    return f"{address[:6]}...{address[-4:]}"


def format_dollars(amount: float) -> str:
    """Compact dollar amount without the sign: 1.2M, 3.4K, 950."""
    if amount >= 1_000_000:
        return f"{amount / 1_000_000:.1f}M"
    if amount >= 1_000:
        return f"{amount / 1_000:.1f}K"
    return f"{amount:.0f}"


def _wallet_to_dict(w: WalletSummary) -> dict[str, Any]:
    return {
        "address": w.address,
        "username": w.name,
        "score": w.score,
        "scoreBreakdown": w.breakdown.to_dict(),
        "position": w.position.value,
        "size": w.size,
        "profit": w.profit,
        "winRate": w.win_rate,
        "totalMarkets": w.total_markets,
    }


def _data_to_dict(data: SignalData) -> dict[str, Any]:
    return {
        "yesHolders": data.yes_wallets,
        "noHolders": data.no_wallets,
        "yesValue": data.yes_value,
        "noValue": data.no_value,
        "yesWeightedValue": data.yes_weighted,
        "noWeightedValue": data.no_weighted,
        "yesPercentage": data.yes_share,
        "whaleDetected": data.whale_detected,
        "topHolders": [_wallet_to_dict(w) for w in data.wallets],
    }


def signal_to_dict(signal: TradingSignal) -> dict[str, Any]:
    return {
        "signal": signal.signal.value,
        "confidence": signal.confidence,
        "reasoning": signal.reasoning,
        "data": _data_to_dict(signal.data) if signal.data is not None else None,
    }


def market_to_dict(market: MarketContext) -> dict[str, Any]:
    return {
        "id": market.market_id,
        "question": market.question,
        "conditionId": market.condition_id,
        "slug": market.slug,
        "outcomes": market.outcomes,
        "outcomePrices": market.outcome_prices,
        "clobTokenIds": market.clob_token_ids,
        "volume": market.volume,
        "liquidity": market.liquidity,
        "active": market.active,
        "closed": market.closed,
        "endDate": market.end_date,
    }


def result_to_dict(market: MarketContext, outcome: AnalysisOutcome) -> dict[str, Any]:
    """Response body of the analyze endpoint."""
    return {
        "market": market_to_dict(market),
        "signal": signal_to_dict(outcome.signal),
        "warnings": list(outcome.warnings),
    }


def format_json(market: MarketContext, outcome: AnalysisOutcome) -> str:
    return json.dumps(result_to_dict(market, outcome), indent=2)


_SIGNAL_COLORS = {
    SignalType.BUY_YES: "green",
    SignalType.BUY_NO: "red",
    SignalType.INCONCLUSIVE: "yellow",
}


def format_table(
    market: MarketContext,
    outcome: AnalysisOutcome,
    console: Console | None = None,
) -> None:
    """Print the signal headline and ranked wallets as a Rich table."""
    if console is None:
        console = Console()

    signal = outcome.signal
    color = _SIGNAL_COLORS[signal.signal]

    console.print(f"[bold]{market.question}[/bold]")
    prices = " | ".join(
        f"{label}: {price:.1%}" for label, price in zip(market.outcomes, market.outcome_prices)
    )
    console.print(f"  {prices}")
    console.print(
        f"\n[bold {color}]{signal.signal.value}[/bold {color}] "
        f"(confidence {signal.confidence}/10)"
    )
    console.print(f"  {signal.reasoning}")

    for warning in outcome.warnings:
        console.print(f"  [yellow]Warning: {warning}[/yellow]")

    if signal.data is None or not signal.data.wallets:
        return

    table = Table(title="Top Wallets by Credibility", show_lines=False)
    table.add_column("#", justify="right", width=3)
    table.add_column("Wallet", width=14)
    table.add_column("Side", width=4)
    table.add_column("Score", justify="right", width=6)
    table.add_column("Size", justify="right", width=9)
    table.add_column("Profit", justify="right", width=10)
    table.add_column("Win %", justify="right", width=6)
    table.add_column("Mkts", justify="right", width=5)

    for rank, w in enumerate(signal.data.wallets, start=1):
        side_color = "green" if w.position.value == "YES" else "red"
        profit_color = "green" if w.profit >= 0 else "red"
        table.add_row(
            str(rank),
            w.name[:14] if w.name else w.address,
            f"[{side_color}]{w.position.value}[/{side_color}]",
            f"{w.score:.1f}",
            f"${format_dollars(w.size)}",
            f"[{profit_color}]${w.profit:,.0f}[/{profit_color}]",
            f"{w.win_rate:.1f}",
            str(w.total_markets),
        )

    console.print(table)


def format_breakdown(breakdown: ScoreBreakdown, console: Console | None = None) -> None:
    """Print a single credibility breakdown."""
    if console is None:
        console = Console()

    table = Table(title="Credibility Score", show_lines=False)
    table.add_column("Factor", width=12)
    table.add_column("Points", justify="right", width=7)
    table.add_column("Max", justify="right", width=5)
    for factor, points, cap in (
        ("Profit", breakdown.profit, 40),
        ("Win rate", breakdown.win_rate, 25),
        ("Volume", breakdown.volume, 15),
        ("Recency", breakdown.recency, 10),
        ("Conviction", breakdown.conviction, 10),
    ):
        table.add_row(factor, f"{points:.2f}", str(cap))
    table.add_row("[bold]Total[/bold]", f"[bold]{breakdown.total:.2f}[/bold]", "100")
    console.print(table)
