"""Qualification filter: which wallets are worth scoring."""

from __future__ import annotations

from smart_money.config import Settings, get_settings
from smart_money.wallets.models import WalletProfile


def is_qualified(
    profile: WalletProfile,
    min_position_size: float = 100.0,
    min_profit: float = 1_000.0,
) -> bool:
    """A wallet qualifies on position size OR enriched profit.

    Position size comes straight from holder data and the current price, so
    it is always trustworthy. Profit may be zero simply because the history
    sources could not resolve the wallet, so it is only an alternative path.
    """
    return profile.current_position_size >= min_position_size or profile.total_profit >= min_profit


def qualify(profiles: list[WalletProfile], settings: Settings | None = None) -> list[WalletProfile]:
    if settings is None:
        settings = get_settings()
    return [
        p for p in profiles
        if is_qualified(p, settings.min_position_size, settings.min_profit_alt)
    ]
