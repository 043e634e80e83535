"""Synthetic daily OHLCV series generation.

Series are shaped by a linear upward trend plus yearly, quarterly and monthly
sine cycles, with uniform daily noise scaled by a volatility parameter. Each
generator owns its own :class:`numpy.random.Generator` so that repeated or
parallel generation is reproducible and independent.
"""

from __future__ import annotations

import hashlib
import logging
from datetime import date, timedelta

import numpy as np

from marketlab.exceptions import DataValidationError
from marketlab.types import Bar, Series

logger = logging.getLogger(__name__)

# Five years of daily bars
SERIES_LENGTH = 1825

# Trend reaches +35% of the base value by the final bar
TREND_FRACTION = 0.35

# (amplitude as a fraction of base value, period in days)
CYCLES = (
    (0.15, 365.0),  # yearly
    (0.05, 90.0),   # quarterly
    (0.02, 30.0),   # monthly
)

# Monday and Friday trade heavier
HIGH_VOLUME_WEEKDAYS = frozenset([0, 4])
HIGH_VOLUME_MULTIPLIER = 1.5
VOLUME_MIN = 3.0
VOLUME_SPAN = 5.0


def derive_seed(base_seed: int | None, name: str) -> int | None:
    """Derive a stable per-instrument seed from a base seed and a name.

    :param base_seed: Catalog-wide seed, or None for unseeded generation.
    :param name: Instrument name.
    :returns: Seed unique to ``name``, or None when ``base_seed`` is None.
    """
    if base_seed is None:
        return None
    name_hash = int(hashlib.md5(name.encode()).hexdigest()[:8], 16)
    return (base_seed * 1_000_003 + name_hash) % (2**32)


class SeriesGenerator:
    """Generate fixed-length daily series from a base value and volatility.

    :param rng: Random source to draw from. Takes precedence over ``seed``.
    :param seed: Seed for a fresh random source when ``rng`` is not given.
    :param length: Number of daily bars per series.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        length: int = SERIES_LENGTH,
    ) -> None:
        if length <= 0:
            raise DataValidationError(f"Series length must be positive, got {length}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.seed = seed
        self.length = length

    def adjusted_base(self, base_value: float) -> np.ndarray:
        """Deterministic trend-plus-seasonality level for every bar index."""
        i = np.arange(self.length, dtype=np.float64)
        level = base_value + base_value * (i / self.length) * TREND_FRACTION
        for amplitude, period in CYCLES:
            level = level + base_value * amplitude * np.sin(i / period)
        return level

    def generate(
        self,
        base_value: float,
        volatility: float = 50.0,
        name: str = "",
        end: date | None = None,
        volume_scale: float = 1.0,
    ) -> Series:
        """Generate a series ending on ``end`` (today by default).

        ``high`` and ``low`` are offset from ``open`` and ``close`` is drawn
        between them; no clamping is applied to any price.

        :param base_value: Level the series starts from.
        :param volatility: Daily price spread.
        :param name: Instrument name stored on the series.
        :param end: Date of the most recent bar.
        :param volume_scale: Factor applied to every bar's volume.
        :returns: Series of ``length`` bars, oldest first.
        :raises DataValidationError: If ``volatility`` is negative.
        """
        if volatility < 0:
            raise DataValidationError(f"Volatility must be non-negative, got {volatility}")

        end = end or date.today()
        n = self.length
        level = self.adjusted_base(base_value)
        draws = self.rng.random((n, 5))

        opens = level + (draws[:, 0] - 0.5) * volatility
        highs = opens + draws[:, 1] * volatility
        lows = opens - draws[:, 2] * volatility
        closes = lows + draws[:, 3] * (highs - lows)

        start = end - timedelta(days=n - 1)
        bars = []
        for i in range(n):
            day = start + timedelta(days=i)
            multiplier = HIGH_VOLUME_MULTIPLIER if day.weekday() in HIGH_VOLUME_WEEKDAYS else 1.0
            volume = np.floor((draws[i, 4] * VOLUME_SPAN + VOLUME_MIN) * multiplier)
            bars.append(
                Bar(
                    date=day,
                    open=round(float(opens[i]), 2),
                    high=round(float(highs[i]), 2),
                    low=round(float(lows[i]), 2),
                    close=round(float(closes[i]), 2),
                    volume=float(volume) * volume_scale,
                )
            )

        logger.debug("Generated series %r: %d bars ending %s (seed=%s)", name, n, end, self.seed)
        return Series(name=name, bars=tuple(bars))


def generate_series(
    name: str,
    base_value: float,
    volatility: float = 50.0,
    seed: int | None = None,
    end: date | None = None,
    length: int = SERIES_LENGTH,
) -> Series:
    """Generate a series for ``name`` from its own freshly seeded random source.

    :param name: Instrument name.
    :param base_value: Level the series starts from.
    :param volatility: Daily price spread.
    :param seed: Seed for reproducible output.
    :param end: Date of the most recent bar (today by default).
    :param length: Number of daily bars.
    :returns: Generated series.
    """
    generator = SeriesGenerator(seed=seed, length=length)
    return generator.generate(base_value, volatility, name=name, end=end)


__all__ = [
    "SERIES_LENGTH",
    "SeriesGenerator",
    "derive_seed",
    "generate_series",
]
