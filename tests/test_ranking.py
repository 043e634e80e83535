"""Tests for heuristic instrument ranking."""

import logging
import math

import pytest

from marketlab.analytics.ranking import (
    RANKING_KEYS,
    TECHNICAL_INDICATORS,
    extremeness_tier,
    parse_ranking_kind,
    rank_instruments,
    top_instruments,
    value_score,
    volatility_score,
    volume_pressure_score,
)
from marketlab.data.catalog import DEFAULT_INSTRUMENTS
from marketlab.types import Instrument, RankingKind


def make(symbol: str, **overrides) -> Instrument:
    fields = {
        "symbol": symbol,
        "name": f"{symbol} Corp",
        "price": 100.0,
        "change": 1.0,
        "change_percent": 1.0,
        "volume": 10.0,
        "market_cap": 100.0,
        "pe": 20.0,
        "sector": "Technology",
    }
    fields.update(overrides)
    return Instrument(**fields)


def symbols(instruments: list[Instrument]) -> list[str]:
    return [i.symbol for i in instruments]


class TestRSI:
    """Extreme movers first, grouped by tier."""

    def test_tiers(self) -> None:
        assert extremeness_tier(5.01) == 2
        assert extremeness_tier(-6) == 2
        assert extremeness_tier(5) == 1
        assert extremeness_tier(-3.5) == 1
        assert extremeness_tier(3) == 0
        assert extremeness_tier(0) == 0

    def test_orders_by_tier_then_magnitude(self) -> None:
        universe = [
            make("A", change_percent=1),
            make("B", change_percent=-6),
            make("C", change_percent=4),
            make("D", change_percent=5.5),
            make("E", change_percent=-2),
        ]
        assert symbols(rank_instruments(universe, "rsi")) == ["B", "D", "C", "E", "A"]


class TestMACD:
    """Positive momentum first, then by magnitude."""

    def test_positive_momentum_first(self) -> None:
        universe = [
            make("DOWN", change_percent=-1),
            make("SMALL", change_percent=1),
            make("BIG", change_percent=4),
        ]
        assert symbols(rank_instruments(universe, "macd")) == ["BIG", "SMALL", "DOWN"]

    def test_zero_sorts_with_negatives(self) -> None:
        universe = [
            make("FLAT", change_percent=0),
            make("UP", change_percent=0.1),
            make("DOWN", change_percent=-3),
        ]
        assert symbols(rank_instruments(universe, RankingKind.MACD)) == ["UP", "DOWN", "FLAT"]

    def test_ties_keep_input_order(self) -> None:
        universe = [
            make("A", change_percent=2),
            make("B", change_percent=-2),
            make("C", change_percent=2),
        ]
        assert symbols(rank_instruments(universe, "macd")) == ["A", "C", "B"]


class TestSMA:
    """Lower P/E per unit of market cap first."""

    def test_value_score(self) -> None:
        assert value_score(make("A", pe=10, market_cap=100)) == pytest.approx(0.1)
        assert value_score(make("B", pe=30, market_cap=50)) == pytest.approx(0.6)

    def test_missing_pe_and_tiny_cap(self) -> None:
        assert value_score(make("A", pe=0, market_cap=0.5)) == 100
        assert value_score(make("B", pe=-4, market_cap=200)) == pytest.approx(0.5)

    def test_lower_score_ranks_first(self) -> None:
        universe = [make("B", pe=30, market_cap=50), make("A", pe=10, market_cap=100)]
        assert symbols(rank_instruments(universe, "sma")) == ["A", "B"]


class TestBollinger:
    """Higher |change| * log10(volume) first."""

    def test_volatility_score(self) -> None:
        inst = make("A", change=-3, volume=1000)
        assert volatility_score(inst) == pytest.approx(9)
        assert volatility_score(make("B", change=5, volume=0.001)) == 0

    def test_orders_descending(self) -> None:
        universe = [
            make("LOW", change=1, volume=0.5),
            make("MID", change=-3, volume=10),
            make("HIGH", change=2, volume=100),
        ]
        assert symbols(rank_instruments(universe, "bb")) == ["HIGH", "MID", "LOW"]


class TestOBV:
    """Higher volume relative to price first."""

    def test_volume_pressure_score(self) -> None:
        assert volume_pressure_score(make("A", volume=50, price=25)) == 2
        assert volume_pressure_score(make("B", volume=3, price=0.5)) == 3

    def test_orders_descending(self) -> None:
        universe = [
            make("A", volume=10, price=100),
            make("B", volume=10, price=5),
            make("C", volume=90, price=100),
        ]
        assert symbols(rank_instruments(universe, "obv")) == ["B", "C", "A"]


class TestDefaultOrdering:
    """Absent or unknown ids fall back to market cap."""

    @pytest.mark.parametrize("indicator_id", [None, "unknown", ""])
    def test_market_cap_descending(self, indicator_id) -> None:
        universe = [
            make("S", market_cap=10),
            make("L", market_cap=1000),
            make("M", market_cap=100),
        ]
        assert symbols(rank_instruments(universe, indicator_id)) == ["L", "M", "S"]

    def test_parse_ranking_kind(self) -> None:
        assert parse_ranking_kind("OBV") is RankingKind.OBV
        assert parse_ranking_kind(RankingKind.BB) is RankingKind.BB
        assert parse_ranking_kind("stochastic") is None
        assert parse_ranking_kind(None) is None

    def test_unknown_id_logged_at_debug(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="marketlab.analytics.ranking")
        rank_instruments([make("A")], "stochastic")
        records = [r for r in caplog.records if "Unknown ranking id" in r.getMessage()]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert "'stochastic'" in records[0].getMessage()

    def test_absent_id_not_logged(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="marketlab.analytics.ranking")
        rank_instruments([make("A")], None)
        assert "Unknown ranking id" not in caplog.text


class TestRankingContract:
    """Properties shared by every strategy."""

    def test_every_kind_has_a_key(self) -> None:
        assert set(RANKING_KEYS) == set(RankingKind)

    def test_every_kind_has_a_technical_indicator(self) -> None:
        assert set(TECHNICAL_INDICATORS) == set(RankingKind)
        for kind, indicator in TECHNICAL_INDICATORS.items():
            assert indicator.id is kind
            assert indicator.name
            assert indicator.description

    def test_technical_indicator_types(self) -> None:
        types = {kind.value: ind.type for kind, ind in TECHNICAL_INDICATORS.items()}
        assert types == {
            "rsi": "momentum",
            "macd": "momentum",
            "sma": "trend",
            "bb": "volatility",
            "obv": "volume",
        }

    @pytest.mark.parametrize("indicator_id", [k.value for k in RankingKind] + [None])
    def test_full_reordering_without_mutation(self, indicator_id) -> None:
        universe = list(DEFAULT_INSTRUMENTS)
        before = list(universe)
        ranked = rank_instruments(universe, indicator_id)

        assert universe == before
        assert sorted(symbols(ranked)) == sorted(symbols(universe))
        assert rank_instruments(universe, indicator_id) == ranked

    def test_equal_scores_keep_input_order(self) -> None:
        universe = [make(s) for s in "ABCDE"]
        for kind in RankingKind:
            assert symbols(rank_instruments(universe, kind)) == list("ABCDE")

    def test_default_universe_macd(self) -> None:
        ranked = rank_instruments(DEFAULT_INSTRUMENTS, "macd")
        assert symbols(ranked)[:2] == ["NVDA", "AMZN"]
        assert ranked[-1].symbol == "TSLA"

    def test_log_scale_for_bb(self) -> None:
        brk = next(i for i in DEFAULT_INSTRUMENTS if i.symbol == "BRK.A")
        assert volatility_score(brk) == 0
        assert math.isclose(
            volatility_score(DEFAULT_INSTRUMENTS[0]), 3.24 * math.log10(58.3)
        )


class TestTopInstruments:
    def test_limit(self) -> None:
        top = top_instruments(DEFAULT_INSTRUMENTS, None, limit=3)
        assert symbols(top) == ["MSFT", "AAPL", "NVDA"]

    def test_limit_larger_than_universe(self) -> None:
        assert len(top_instruments(DEFAULT_INSTRUMENTS, "rsi", limit=50)) == 10
