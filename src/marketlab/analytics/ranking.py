"""Heuristic ranking of an instrument universe.

Each :class:`RankingKind` maps to a sort key over the flat instrument record.
Sorting is stable, so instruments with equal keys keep their input order.
Unrecognised ids fall back to market-cap ordering, matching the scanner's
default view.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, Iterable

from marketlab.types import Instrument, RankingKind, TechnicalIndicator

logger = logging.getLogger(__name__)

SortKey = Callable[[Instrument], Any]

# Placeholder P/E for instruments without meaningful earnings
MISSING_PE = 100.0


def extremeness_tier(change_percent: float) -> int:
    """Bucket a percent move into 2 (> 5%), 1 (> 3%) or 0."""
    magnitude = abs(change_percent)
    if magnitude > 5:
        return 2
    if magnitude > 3:
        return 1
    return 0


def value_score(instrument: Instrument) -> float:
    """P/E per unit of market cap; lower is better value."""
    pe = instrument.pe if instrument.pe > 0 else MISSING_PE
    return pe / max(instrument.market_cap, 1)


def volatility_score(instrument: Instrument) -> float:
    """Absolute change weighted by the order of magnitude of volume."""
    return abs(instrument.change) * math.log10(max(instrument.volume, 1))


def volume_pressure_score(instrument: Instrument) -> float:
    """Volume relative to price."""
    return instrument.volume / max(instrument.price, 1)


def _rsi_key(instrument: Instrument) -> tuple[int, float]:
    # Oversold/overbought: most extreme moves first
    return (-extremeness_tier(instrument.change_percent), -abs(instrument.change_percent))


def _macd_key(instrument: Instrument) -> tuple[int, float]:
    # Positive momentum first, then by strength
    return (0 if instrument.change_percent > 0 else 1, -abs(instrument.change_percent))


def _sma_key(instrument: Instrument) -> float:
    return value_score(instrument)


def _bb_key(instrument: Instrument) -> float:
    return -volatility_score(instrument)


def _obv_key(instrument: Instrument) -> float:
    return -volume_pressure_score(instrument)


def _market_cap_key(instrument: Instrument) -> float:
    return -instrument.market_cap


RANKING_KEYS: dict[RankingKind, SortKey] = {
    RankingKind.RSI: _rsi_key,
    RankingKind.MACD: _macd_key,
    RankingKind.SMA: _sma_key,
    RankingKind.BB: _bb_key,
    RankingKind.OBV: _obv_key,
}

TECHNICAL_INDICATORS: dict[RankingKind, TechnicalIndicator] = {
    RankingKind.RSI: TechnicalIndicator(
        id=RankingKind.RSI,
        name="Relative Strength Index",
        description="Most extreme daily moves first (overbought or oversold)",
        type="momentum",
    ),
    RankingKind.MACD: TechnicalIndicator(
        id=RankingKind.MACD,
        name="MACD",
        description="Advancers before decliners, strongest moves first",
        type="momentum",
    ),
    RankingKind.SMA: TechnicalIndicator(
        id=RankingKind.SMA,
        name="Simple Moving Average",
        description="Best value first (lowest P/E per unit of market cap)",
        type="trend",
    ),
    RankingKind.BB: TechnicalIndicator(
        id=RankingKind.BB,
        name="Bollinger Bands",
        description="Most volatile first (absolute change weighted by volume)",
        type="volatility",
    ),
    RankingKind.OBV: TechnicalIndicator(
        id=RankingKind.OBV,
        name="On-Balance Volume",
        description="Heaviest volume relative to price first",
        type="volume",
    ),
}


def parse_ranking_kind(indicator_id: str | RankingKind | None) -> RankingKind | None:
    """Resolve a ranking id, returning None when it is absent or unknown."""
    if indicator_id is None or isinstance(indicator_id, RankingKind):
        return indicator_id
    try:
        return RankingKind(indicator_id.lower())
    except ValueError:
        return None


def rank_instruments(
    universe: Iterable[Instrument],
    indicator_id: str | RankingKind | None = None,
) -> list[Instrument]:
    """Reorder a universe under a named heuristic.

    The input is never mutated; a new list holding every instrument is
    returned. An absent or unrecognised ``indicator_id`` deliberately falls
    back to descending market cap rather than raising.

    :param universe: Instruments to rank.
    :param indicator_id: One of ``rsi``, ``macd``, ``sma``, ``bb``, ``obv``.
    :returns: All instruments, best first.
    """
    kind = parse_ranking_kind(indicator_id)
    if kind is None:
        if indicator_id is not None:
            logger.debug("Unknown ranking id %r, ordering by market cap", indicator_id)
        key = _market_cap_key
    else:
        key = RANKING_KEYS[kind]
    return sorted(universe, key=key)


def top_instruments(
    universe: Iterable[Instrument],
    indicator_id: str | RankingKind | None = None,
    limit: int = 5,
) -> list[Instrument]:
    """First ``limit`` instruments of :func:`rank_instruments`."""
    return rank_instruments(universe, indicator_id)[:limit]


__all__ = [
    "RANKING_KEYS",
    "TECHNICAL_INDICATORS",
    "extremeness_tier",
    "value_score",
    "volatility_score",
    "volume_pressure_score",
    "parse_ranking_kind",
    "rank_instruments",
    "top_instruments",
]
