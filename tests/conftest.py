"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from smart_money.markets.models import HolderListing, MarketContext, Outcome, RawHolder

from helpers import NO_TOKEN, YES_TOKEN, make_scored


@pytest.fixture
def now():
    return datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def market():
    """Binary market at YES 0.60 / NO 0.40 with a full token map."""
    return MarketContext(
        market_id="m-1",
        question="Will the candidate win?",
        condition_id="0xcond",
        slug="will-the-candidate-win",
        outcomes=["Yes", "No"],
        outcome_prices=[0.60, 0.40],
        clob_token_ids=[YES_TOKEN, NO_TOKEN],
        outcome_for_token={YES_TOKEN: "Yes", NO_TOKEN: "No"},
        volume=250_000.0,
        liquidity=40_000.0,
    )


@pytest.fixture
def listings():
    return [
        HolderListing(
            token_id=YES_TOKEN,
            holders=[
                RawHolder(address="0xYes1", shares=10_000, name="whale"),
                RawHolder(address="0xYes2", shares=5_000),
                RawHolder(address="0xYes3", shares=2_000),
            ],
        ),
        HolderListing(
            token_id=NO_TOKEN,
            holders=[
                RawHolder(address="0xNo1", shares=3_000),
                RawHolder(address="0xNo2", shares=50),
            ],
        ),
    ]


@pytest.fixture
def gamma_event_response():
    """Mock Gamma /events/slug response with two markets."""
    return {
        "id": "evt-1",
        "slug": "election-2028",
        "title": "Election 2028",
        "markets": [
            {
                "id": "m-1",
                "question": "Will the candidate win?",
                "conditionId": "0xcond1",
                "slug": "will-the-candidate-win",
                "outcomes": '["Yes", "No"]',
                "outcomePrices": '["0.62", "0.38"]',
                "clobTokenIds": '["111", "222"]',
                "volume": "250000.5",
                "liquidity": "40000",
                "active": True,
                "closed": False,
                "endDate": "2028-11-07T00:00:00Z",
            },
            {
                "id": "m-2",
                "question": "Will the challenger win?",
                "conditionId": "0xcond2",
                "slug": "will-the-challenger-win",
                "outcomes": '["Yes", "No"]',
                "outcomePrices": '["0.30", "0.70"]',
                "clobTokenIds": '["333", "444"]',
                "volume": "1000",
                "liquidity": "500",
                "active": True,
                "closed": False,
            },
        ],
    }


@pytest.fixture
def holders_response():
    """Mock Data API /holders response."""
    return [
        {
            "token": "111",
            "holders": [
                {"proxyWallet": "0xaaa1", "amount": 1000, "name": "alice"},
                {"proxyWallet": "0xaaa2", "amount": "250.5"},
            ],
        },
        {
            "token": "222",
            "holders": [
                {"proxyWallet": "0xbbb1", "amount": 400},
                {"amount": 10},
            ],
        },
    ]


@pytest.fixture
def analysis_result(market):
    """A BUY YES result over three ranked wallets."""
    from smart_money.pipeline import AnalysisResult
    from smart_money.signals.generator import generate_trading_signal
    from smart_money.signals.models import AnalysisOutcome

    ranked = [
        make_scored(3_000, Outcome.YES, address="0x1111111111111111111111111111111111111111"),
        make_scored(2_000, Outcome.YES, address="0x2222222222222222222222222222222222222222"),
        make_scored(500, Outcome.NO, address="0x3333333333333333333333333333333333333333"),
    ]
    outcome = AnalysisOutcome(
        signal=generate_trading_signal(ranked),
        warnings=["1 of 3 wallets had incomplete profile data."],
    )
    return AnalysisResult(market=market, outcome=outcome)
