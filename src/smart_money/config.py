"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Polymarket Gamma API base URL (events, markets)
    gamma_api_url: str = "https://gamma-api.polymarket.com"

    # Polymarket Data API base URL (holders, positions, leaderboard, activity)
    data_api_url: str = "https://data-api.polymarket.com"

    # HTTP request timeout seconds
    http_timeout: float = 10.0

    # Whole-analysis timeout seconds (URL -> signal)
    analysis_timeout: float = 60.0

    # Fixed page sizes for the Data API
    holders_limit: int = 20
    positions_limit: int = 50
    activity_limit: int = 5

    # Wallets enriched concurrently per batch
    enrichment_concurrency: int = 10

    # Ranked wallets passed to signal generation
    top_n: int = 20

    # Qualification floors: position size OR enriched profit
    min_position_size: float = 100.0
    min_profit_alt: float = 1_000.0

    # Markets needed for full win-rate weight
    win_rate_full_weight_markets: int = 20

    # Corrupted-data ceilings for enrichment
    pnl_sanity_ceiling: float = 50_000_000.0
    avg_size_sanity_ceiling: float = 10_000_000.0

    # Cache TTLs (seconds)
    market_cache_ttl: float = 30 * 60
    holders_cache_ttl: float = 10 * 60
    profile_cache_ttl: float = 10 * 60

    @field_validator("enrichment_concurrency", "top_n", "win_rate_full_weight_markets")
    @classmethod
    def _positive_int(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"must be > 0, got {v}")
        return v

    @field_validator("min_position_size", "min_profit_alt")
    @classmethod
    def _floor_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"qualification floor must be >= 0, got {v}")
        return v

    @field_validator("http_timeout", "analysis_timeout")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"timeout must be > 0, got {v}")
        return v


def get_settings() -> Settings:
    """Load settings from the environment and .env file."""
    return Settings()
