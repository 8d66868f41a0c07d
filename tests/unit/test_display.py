"""Unit tests for the display transformer — percentages, tooltips, threshold."""
from __future__ import annotations

import random

import pytest

from sol_portfolio.models import AssetRecord
from sol_portfolio.portfolio.aggregator import aggregate
from sol_portfolio.portfolio.display import (
    format_tooltip,
    make_displayable,
    percent_of,
    round_percent,
)


class TestRoundPercent:
    def test_rounds_to_one_decimal(self) -> None:
        assert round_percent(12.345) == 12.3

    def test_tie_rounds_away_from_zero(self) -> None:
        assert round_percent(0.05) == 0.1
        assert round_percent(0.15) == 0.2
        assert round_percent(2.25) == 2.3

    def test_below_tie_rounds_down(self) -> None:
        assert round_percent(0.449) == 0.4

    def test_percent_of(self) -> None:
        assert percent_of(1.0, 3.0) == 33.3


class TestFormatTooltip:
    def test_format(self) -> None:
        assert format_tooltip("FOO", 10.0) == "FOO: 10.0%"


class TestMakeDisplayable:
    def test_two_holdings(self, sample_records: list[AssetRecord]) -> None:
        result = {d.symbol: d for d in make_displayable(aggregate(sample_records))}
        assert result["FOO"].percent == 10.0
        assert result["BAR"].percent == 90.0
        assert result["FOO"].tooltip == "FOO: 10.0%"
        assert result["BAR"].value_usd == 900.0

    def test_small_holding_filtered_without_renormalizing(self) -> None:
        records = [
            AssetRecord(id="X", symbol="TINY", value_usd=1.0),
            AssetRecord(id="Y", symbol="BIG", value_usd=999.0),
        ]
        result = make_displayable(records)
        assert [d.symbol for d in result] == ["BIG"]
        # Share is taken against the unfiltered total.
        assert result[0].percent == 99.9
        assert result[0].tooltip == "BIG: 99.9%"

    def test_threshold_is_inclusive(self) -> None:
        records = [
            AssetRecord(id="X", symbol="EDGE", value_usd=5.0),
            AssetRecord(id="Y", symbol="REST", value_usd=995.0),
        ]
        result = make_displayable(records)
        assert {d.symbol for d in result} == {"EDGE", "REST"}

    def test_custom_threshold(self, sample_records: list[AssetRecord]) -> None:
        result = make_displayable(aggregate(sample_records), min_percent=20.0)
        assert [d.symbol for d in result] == ["BAR"]

    def test_empty_input(self) -> None:
        assert make_displayable([]) == []

    def test_zero_total(self) -> None:
        records = [AssetRecord(id="Z", symbol="ZERO", value_usd=0.0)]
        assert make_displayable(records) == []

    def test_keeps_input_order(self) -> None:
        records = [
            AssetRecord(id="a", symbol="A", value_usd=10.0),
            AssetRecord(id="b", symbol="B", value_usd=30.0),
            AssetRecord(id="c", symbol="C", value_usd=20.0),
        ]
        assert [d.symbol for d in make_displayable(records)] == ["A", "B", "C"]


class TestDisplayProperties:
    @pytest.fixture()
    def many_records(self) -> list[AssetRecord]:
        rng = random.Random(42)
        return [
            AssetRecord(id=str(i), symbol=f"T{i}", value_usd=rng.uniform(0.01, 1000))
            for i in range(40)
        ]

    def test_percent_sums_to_about_100(self, many_records: list[AssetRecord]) -> None:
        result = make_displayable(many_records, min_percent=0.0)
        assert len(result) == len(many_records)
        assert abs(sum(d.percent for d in result) - 100.0) <= 0.1 * len(result)

    def test_filter_is_monotonic(self, many_records: list[AssetRecord]) -> None:
        unfiltered = make_displayable(many_records, min_percent=0.0)
        filtered_ids = {d.id for d in make_displayable(many_records)}
        for d in unfiltered:
            assert (d.id in filtered_ids) == (d.percent >= 0.5)
