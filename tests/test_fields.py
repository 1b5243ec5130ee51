"""Tests for candidate-field extraction and timestamp parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from smart_money.common.fields import ABSENT, first_float, first_int, first_str, or_default
from smart_money.common.types import parse_timestamp


class TestFirstFloat:
    def test_first_candidate_wins(self):
        assert first_float({"pnl": 5, "profit": 9}, "pnl", "profit") == 5.0

    def test_falls_through_unusable_values(self):
        data = {"pnl": None, "profit": "not a number", "gain": "12.5"}
        assert first_float(data, "pnl", "profit", "gain") == 12.5

    def test_zero_is_a_value(self):
        assert first_float({"pnl": 0}, "pnl", "profit") == 0.0

    def test_absent(self):
        assert first_float({}, "pnl") is ABSENT
        assert first_float({"pnl": True}, "pnl") is ABSENT
        assert first_float({"pnl": "nan"}, "pnl") is ABSENT

    def test_or_default(self):
        assert or_default(first_float({}, "vol", "volume"), 0.0) == 0.0
        assert or_default(first_float({"volume": "3"}, "vol", "volume"), 0.0) == 3.0


def test_first_int_truncates():
    assert first_int({"markets": "17.0"}, "marketsTraded", "markets") == 17


def test_first_str_skips_empty():
    assert first_str({"a": "", "b": "x"}, "a", "b") == "x"
    assert first_str({"a": 5}, "a") is ABSENT


def test_absent_is_falsy_singleton():
    assert not ABSENT
    assert first_float({}, "x") is first_str({}, "y")


class TestParseTimestamp:
    expected = datetime(2026, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "raw",
        [1_767_225_600, 1_767_225_600.0, 1_767_225_600_000, "1767225600", "2026-01-01T00:00:00+00:00"],
    )
    def test_encodings(self, raw):
        assert parse_timestamp(raw) == self.expected

    @pytest.mark.parametrize("raw", [None, "", "yesterday", True, {"ts": 1}])
    def test_unparseable(self, raw):
        assert parse_timestamp(raw) is None
