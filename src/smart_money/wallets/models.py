"""Wallet data models: partial holder records, upstream history, profiles."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from smart_money.common.types import EPOCH_ZERO
from smart_money.markets.models import Outcome


@dataclass
class HolderPosition:
    """A wallet's position in the market under analysis.

    Produced by the position mapper before any history enrichment.
    """

    address: str
    position: Outcome
    size: float  # dollar estimate: shares * outcome price
    shares: float
    name: str | None = None


@dataclass
class LeaderboardEntry:
    """A leaderboard row. ``wallet`` is empty when upstream omits it."""

    wallet: str
    pnl: float
    volume: float
    markets_traded: int

    def matches(self, address: str) -> bool:
        """True unless upstream returned a *different* wallet's row."""
        return not self.wallet or self.wallet.lower() == address.lower()


@dataclass
class WalletPosition:
    """One historical position from the Data API ``/positions`` endpoint."""

    condition_id: str = ""
    title: str = ""
    size: float = 0.0
    initial_value: float = 0.0
    current_value: float = 0.0
    cash_pnl: float = 0.0


@dataclass
class ActivityEvent:
    """One activity row; ``timestamp`` is kept raw (seconds, millis, or ISO)."""

    timestamp: object = None
    kind: str = ""


@dataclass
class WalletProfile:
    """Reconciled per-wallet profile used for credibility scoring.

    Attributes:
        address: wallet address (unique per analysis, case-insensitive)
        name: optional display name
        total_profit: lifetime PnL in dollars (signed)
        total_volume: lifetime traded volume in dollars
        total_markets: number of markets traded
        win_rate: percentage (0-100) of sampled positions with positive PnL
        sampled_positions: how many positions backed the win rate
        last_trade: most recent trade; EPOCH_ZERO when unknown
        avg_position_size: mean historical position size in dollars
        current_position: side held in this market
        current_position_size: dollar size held in this market
        current_shares: share count held in this market
    """

    address: str
    current_position: Outcome
    current_position_size: float
    current_shares: float = 0.0
    name: str | None = None
    total_profit: float = 0.0
    total_volume: float = 0.0
    total_markets: int = 0
    win_rate: float = 0.0
    sampled_positions: int = 0
    last_trade: datetime = EPOCH_ZERO
    avg_position_size: float = 0.0

    @property
    def is_blank(self) -> bool:
        """No usable history: zero markets and zero profit."""
        return self.total_markets == 0 and self.total_profit == 0
