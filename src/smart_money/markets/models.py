"""Market and holder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# Price assumed for an outcome whose price is missing
DEFAULT_OUTCOME_PRICE = 0.5


class Outcome(Enum):
    """Side of a binary market a wallet holds."""

    YES = "YES"
    NO = "NO"

    @classmethod
    def from_label(cls, label: str) -> Outcome:
        """Map an outcome label ("Yes", "No", "Trump", ...) to a side.

        Only a label reading "yes" maps to YES; everything else is NO.
        """
        return cls.YES if label.strip().upper() == "YES" else cls.NO


@dataclass
class MarketContext:
    """A resolved Polymarket market with per-outcome prices.

    ``outcome_for_token`` maps CLOB token ids to outcome labels using the
    Gamma API's index-wise ``outcomes[i] <-> clobTokenIds[i]`` pairing.
    """

    market_id: str
    question: str
    condition_id: str
    slug: str = ""
    outcomes: list[str] = field(default_factory=lambda: ["Yes", "No"])
    outcome_prices: list[float] = field(default_factory=lambda: [0.5, 0.5])
    clob_token_ids: list[str] = field(default_factory=list)
    outcome_for_token: dict[str, str] = field(default_factory=dict)
    volume: float = 0.0
    liquidity: float = 0.0
    active: bool = True
    closed: bool = False
    end_date: str = ""

    def price_for_outcome(self, label: str) -> float:
        """Current price of an outcome label, or 0.5 if unknown."""
        for i, outcome in enumerate(self.outcomes):
            if outcome == label:
                if i < len(self.outcome_prices):
                    return self.outcome_prices[i]
                break
        return DEFAULT_OUTCOME_PRICE

    @property
    def has_default_prices(self) -> bool:
        """True when prices read exactly 50/50 (possibly a parse fallback)."""
        return self.outcome_prices[:2] == [0.5, 0.5]


@dataclass
class RawHolder:
    """One entry of a per-token holder listing."""

    address: str
    shares: float
    name: str | None = None


@dataclass
class HolderListing:
    """Top holders of a single outcome token."""

    token_id: str
    holders: list[RawHolder] = field(default_factory=list)
