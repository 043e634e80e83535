"""Trailing-window selection and change summaries over price points."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from marketlab.exceptions import InvalidRangeTokenError
from marketlab.types import Bar, ChangeSummary, PricePoint, RangeToken, Series


def to_price_points(series: Series | Iterable[Bar]) -> list[PricePoint]:
    """Project bars onto ``(date, close, volume)`` chart points.

    :param series: Series or iterable of bars.
    :returns: One price point per bar, in the same order.
    """
    bars = series.bars if isinstance(series, Series) else series
    return [PricePoint(date=bar.date, price=bar.close, volume=bar.volume) for bar in bars]


def parse_range_token(token: str | RangeToken) -> RangeToken:
    """Resolve a range token string.

    :param token: One of ``1m``, ``3m``, ``6m``, ``1y``, ``5y``.
    :returns: Matching :class:`RangeToken`.
    :raises InvalidRangeTokenError: If the token is not recognised.
    """
    if isinstance(token, RangeToken):
        return token
    try:
        return RangeToken(token)
    except ValueError as e:
        raise InvalidRangeTokenError(
            f"Invalid range token '{token}'. "
            f"Valid options: {[t.value for t in RangeToken]}"
        ) from e


def filter_by_range(
    points: list[PricePoint],
    range_token: str | RangeToken,
    today: date | None = None,
) -> list[PricePoint]:
    """Keep the points that fall within a trailing window.

    The window is measured back from ``today`` (the wall-clock date unless
    given), not from the last point, so a static series loses points from its
    visible window as time passes.

    :param points: Date-ordered price points.
    :param range_token: Window to select.
    :param today: Reference date for the window.
    :returns: Points with ``date >= today - window``.
    :raises InvalidRangeTokenError: If the token is not recognised.
    """
    token = parse_range_token(range_token)
    cutoff = (today or date.today()) - timedelta(days=token.days)
    return [point for point in points if point.date >= cutoff]


def compute_change(points: list[PricePoint]) -> ChangeSummary:
    """Change from the first to the last point of a window.

    Fewer than two points yield a zero summary.

    :param points: Date-ordered price points.
    :returns: Absolute and percent change.
    """
    if len(points) < 2:
        return ChangeSummary(absolute=0.0, percent=0.0, percent_display="0.00")

    first = points[0].price
    last = points[-1].price
    absolute = last - first
    percent = (absolute / first) * 100 if first else 0.0
    return ChangeSummary(
        absolute=absolute,
        percent=percent,
        percent_display=f"{percent:.2f}",
    )


__all__ = [
    "to_price_points",
    "parse_range_token",
    "filter_by_range",
    "compute_change",
]
