"""Windowing, change summaries, moving averages and instrument ranking."""

from marketlab.analytics.indicators import (
    INDICATOR_METHODS,
    clamp_period,
    compute_ema,
    compute_indicator,
    compute_sma,
)
from marketlab.analytics.ranges import (
    compute_change,
    filter_by_range,
    to_price_points,
)
from marketlab.analytics.ranking import rank_instruments, top_instruments

__all__ = [
    "to_price_points",
    "filter_by_range",
    "compute_change",
    "compute_sma",
    "compute_ema",
    "compute_indicator",
    "clamp_period",
    "INDICATOR_METHODS",
    "rank_instruments",
    "top_instruments",
]
