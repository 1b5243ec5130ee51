"""Typer CLI: smart-money analyze, score."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="smart-money",
    help="Polymarket smart money analyzer: trading signals from top holders",
    no_args_is_help=True,
)
console = Console()


class OutputFormat(str, Enum):
    table = "table"
    json = "json"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def analyze(
    url: str = typer.Argument(help="Polymarket event URL"),
    output: OutputFormat = typer.Option(
        OutputFormat.table, "--output", "-o",
        help="Output format",
    ),
    top: Optional[int] = typer.Option(
        None, "--top",
        help="Override how many ranked wallets feed the signal",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout",
        help="Override the whole-analysis timeout in seconds",
    ),
) -> None:
    """Analyze a market's top holders and print a trading signal."""
    from smart_money.config import get_settings
    from smart_money.errors import SmartMoneyError
    from smart_money.signals.formatters import format_json, format_table

    settings = get_settings()
    if top is not None:
        if top <= 0:
            console.print("[red]--top must be positive[/red]")
            raise typer.Exit(code=2)
        settings = settings.model_copy(update={"top_n": top})

    async def _run() -> None:
        from smart_money.pipeline import analyze_url

        result = await analyze_url(url, timeout=timeout, settings=settings)

        if output is OutputFormat.json:
            console.print_json(format_json(result.market, result.outcome))
        else:
            format_table(result.market, result.outcome, console)

    try:
        asyncio.run(_run())
    except SmartMoneyError as exc:
        console.print(f"[red]Error: {exc.message}[/red]")
        raise typer.Exit(code=1)


@app.command()
def score(
    profit: float = typer.Option(0.0, "--profit", help="Total profit in dollars"),
    win_rate: float = typer.Option(0.0, "--win-rate", help="Win rate percentage (0-100)"),
    markets: int = typer.Option(0, "--markets", help="Markets traded"),
    days_since_trade: Optional[int] = typer.Option(
        None, "--days-since-trade",
        help="Days since the last trade (omit if unknown)",
    ),
    current_size: float = typer.Option(0.0, "--current-size", help="Current position size in dollars"),
    avg_size: float = typer.Option(0.0, "--avg-size", help="Average historical position size"),
) -> None:
    """Score a hypothetical wallet and print its credibility breakdown."""
    from smart_money.common.types import EPOCH_ZERO
    from smart_money.config import get_settings
    from smart_money.markets.models import Outcome
    from smart_money.scoring.credibility import score_wallet
    from smart_money.signals.formatters import format_breakdown
    from smart_money.wallets.models import WalletProfile

    now = datetime.now(timezone.utc)
    last_trade = EPOCH_ZERO if days_since_trade is None else now - timedelta(days=days_since_trade)

    profile = WalletProfile(
        address="cli",
        current_position=Outcome.YES,
        current_position_size=current_size,
        total_profit=profit,
        total_markets=markets,
        win_rate=win_rate,
        last_trade=last_trade,
        avg_position_size=avg_size,
    )
    scored = score_wallet(
        profile, now=now, full_weight_markets=get_settings().win_rate_full_weight_markets,
    )
    format_breakdown(scored.breakdown, console)


if __name__ == "__main__":
    app()
