"""Moving-average overlays computed over price points.

Every indicator returns a list aligned with its input: entries before the
first full window are ``None`` and the rest hold values rounded to two
decimals. Periods outside ``[1, len(points)]`` produce an all-``None`` list.
"""

from __future__ import annotations

import logging
from typing import Callable

from marketlab.exceptions import UnknownIndicatorError
from marketlab.types import IndicatorKind, IndicatorMethod, PricePoint

logger = logging.getLogger(__name__)

IndicatorSeries = list[float | None]


def _is_degenerate(points: list[PricePoint], period: int) -> bool:
    if period <= 0 or period > len(points):
        logger.debug("Degenerate period %d for %d points", period, len(points))
        return True
    return False


def compute_sma(points: list[PricePoint], period: int) -> IndicatorSeries:
    """Simple moving average of closing prices.

    :param points: Date-ordered price points.
    :param period: Window length.
    :returns: Aligned SMA values.
    """
    if _is_degenerate(points, period):
        return [None] * len(points)

    prices = [p.price for p in points]
    result: IndicatorSeries = [None] * (period - 1)
    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1 : i + 1]
        result.append(round(sum(window) / period, 2))
    return result


def compute_ema(points: list[PricePoint], period: int) -> IndicatorSeries:
    """Exponential moving average of closing prices.

    Seeded with the SMA of the first ``period`` prices, then updated with
    ``k = 2 / (period + 1)``. The running average is carried unrounded; only
    the emitted values are rounded.

    :param points: Date-ordered price points.
    :param period: Window length.
    :returns: Aligned EMA values.
    """
    if _is_degenerate(points, period):
        return [None] * len(points)

    k = 2 / (period + 1)
    prices = [p.price for p in points]
    ema = sum(prices[:period]) / period
    result: IndicatorSeries = [None] * (period - 1)
    result.append(round(ema, 2))
    for price in prices[period:]:
        ema = price * k + ema * (1 - k)
        result.append(round(ema, 2))
    return result


INDICATORS: dict[IndicatorKind, Callable[[list[PricePoint], int], IndicatorSeries]] = {
    IndicatorKind.SMA: compute_sma,
    IndicatorKind.EMA: compute_ema,
}

INDICATOR_METHODS: dict[IndicatorKind, IndicatorMethod] = {
    IndicatorKind.SMA: IndicatorMethod(
        id=IndicatorKind.SMA,
        name="Simple Moving Average (SMA)",
        description="Average price over a specific number of periods",
        color="rgba(75, 192, 192, 1)",
    ),
    IndicatorKind.EMA: IndicatorMethod(
        id=IndicatorKind.EMA,
        name="Exponential Moving Average (EMA)",
        description="Weighted moving average that gives more importance to recent prices",
        color="rgba(153, 102, 255, 1)",
    ),
}


def parse_indicator_kind(kind: str | IndicatorKind) -> IndicatorKind:
    """Resolve an indicator id such as ``"sma"``.

    :raises UnknownIndicatorError: If the id is not a known overlay.
    """
    if isinstance(kind, IndicatorKind):
        return kind
    try:
        return IndicatorKind(kind.lower())
    except ValueError as e:
        raise UnknownIndicatorError(
            f"Unknown indicator '{kind}'. "
            f"Valid options: {[k.value for k in IndicatorKind]}"
        ) from e


def compute_indicator(
    kind: str | IndicatorKind,
    points: list[PricePoint],
    period: int,
) -> IndicatorSeries:
    """Compute an overlay by kind.

    :param kind: Indicator id.
    :param points: Date-ordered price points.
    :param period: Window length.
    :returns: Aligned indicator values.
    :raises UnknownIndicatorError: If ``kind`` is not a known overlay.
    """
    return INDICATORS[parse_indicator_kind(kind)](points, period)


def clamp_period(method: IndicatorMethod, period: int | None) -> int:
    """Bring a requested period into the method's accepted bounds.

    :param method: Overlay definition.
    :param period: Requested period, or None for the default.
    :returns: Period within ``[min_period, max_period]``.
    """
    if period is None:
        return method.default_period
    return max(method.min_period, min(method.max_period, period))


__all__ = [
    "IndicatorSeries",
    "INDICATORS",
    "INDICATOR_METHODS",
    "compute_sma",
    "compute_ema",
    "compute_indicator",
    "parse_indicator_kind",
    "clamp_period",
]
