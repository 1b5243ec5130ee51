"""Tests for the qualification filter."""

from __future__ import annotations

from smart_money.config import Settings
from smart_money.scoring.filters import is_qualified, qualify

from helpers import make_profile


def test_position_size_path():
    assert is_qualified(make_profile(size=100, profit=0))
    assert not is_qualified(make_profile(size=99.99, profit=0))


def test_profit_path_for_small_positions():
    assert is_qualified(make_profile(size=20, profit=1_000))
    assert not is_qualified(make_profile(size=20, profit=999))


def test_losing_wallet_with_large_position_qualifies():
    assert is_qualified(make_profile(size=5_000, profit=-20_000))


def test_qualify_uses_settings_and_keeps_order():
    profiles = [
        make_profile(address="0xa", size=50, profit=0),
        make_profile(address="0xb", size=300, profit=0),
        make_profile(address="0xc", size=10, profit=600),
        make_profile(address="0xd", size=250, profit=0),
    ]
    settings = Settings(min_position_size=200, min_profit_alt=500)

    assert [p.address for p in qualify(profiles, settings)] == ["0xb", "0xc", "0xd"]
