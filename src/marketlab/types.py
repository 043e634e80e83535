"""Core type definitions for the market analytics engine.

All data models use Pydantic BaseModel for automatic validation, JSON
serialization, and better error messages.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Base Configuration
# ---------------------------------------------------------------------------


class FrozenModel(BaseModel):
    """Base model with frozen (immutable) configuration."""

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class RangeToken(str, Enum):
    """Trailing chart window, measured back from today."""

    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    FIVE_YEARS = "5y"

    @property
    def days(self) -> int:
        """Length of the window in calendar days."""
        return _RANGE_DAYS[self]


_RANGE_DAYS = {
    RangeToken.ONE_MONTH: 30,
    RangeToken.THREE_MONTHS: 90,
    RangeToken.SIX_MONTHS: 180,
    RangeToken.ONE_YEAR: 365,
    RangeToken.FIVE_YEARS: 1825,
}


class IndicatorKind(str, Enum):
    """Moving-average overlays that can be drawn on a price chart."""

    SMA = "sma"
    EMA = "ema"


class RankingKind(str, Enum):
    """Named heuristics used to order an instrument universe.

    The names are labels for simplified proxies, not full computations of
    the underlying technical indicators.
    """

    RSI = "rsi"
    MACD = "macd"
    SMA = "sma"
    BB = "bb"
    OBV = "obv"


# ---------------------------------------------------------------------------
# Market Data Types
# ---------------------------------------------------------------------------


class Bar(FrozenModel):
    """One trading day of synthetic market data.

    :param date: Calendar date of the bar.
    :param open: Opening price.
    :param high: Highest price of the day.
    :param low: Lowest price of the day.
    :param close: Closing price.
    :param volume: Traded volume (billions for indices, millions for stocks).
    """

    date: dt.date
    open: float
    high: float
    low: float
    close: float
    volume: float


class Series(FrozenModel):
    """Date-ordered bars for a single named instrument.

    :param name: Instrument name the series was generated for.
    :param bars: Bars, oldest first.
    """

    name: str
    bars: tuple[Bar, ...] = ()

    def __len__(self) -> int:
        return len(self.bars)

    @property
    def first_date(self) -> dt.date | None:
        return self.bars[0].date if self.bars else None

    @property
    def last_date(self) -> dt.date | None:
        return self.bars[-1].date if self.bars else None


class PricePoint(FrozenModel):
    """Chart projection of a bar.

    :param date: Calendar date of the point.
    :param price: Closing price of the underlying bar.
    :param volume: Traded volume.
    """

    date: dt.date
    price: float
    volume: float


class ChangeSummary(FrozenModel):
    """First-versus-last change over a window of price points.

    :param absolute: Last price minus first price.
    :param percent: Change relative to the first price, in percent.
    :param percent_display: ``percent`` formatted with two decimals.
    """

    absolute: float
    percent: float
    percent_display: str

    @property
    def is_positive(self) -> bool:
        return self.percent >= 0


# ---------------------------------------------------------------------------
# Instrument Types
# ---------------------------------------------------------------------------


class Instrument(FrozenModel):
    """Flat quote record used for ranking and sector views.

    Accepts the camelCase keys used by catalog files (``changePercent``,
    ``marketCap``) as well as the snake_case field names.

    :param symbol: Ticker symbol.
    :param name: Display name.
    :param price: Last price.
    :param change: Absolute change on the day.
    :param change_percent: Percent change on the day.
    :param volume: Traded volume, in millions.
    :param market_cap: Market capitalisation, in billions.
    :param pe: Price to earnings ratio (non-positive when not meaningful).
    :param sector: Sector name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    name: str
    price: float
    change: float
    change_percent: float = Field(alias="changePercent")
    volume: float
    market_cap: float = Field(alias="marketCap")
    pe: float
    sector: str


class IndexQuote(FrozenModel):
    """Latest value of an index and its change over the last session.

    :param name: Index name.
    :param value: Latest close.
    :param change: Absolute change from the previous close.
    :param change_percent: Percent change from the previous close.
    """

    name: str
    value: float
    change: float
    change_percent: float


class SectorPerformance(FrozenModel):
    """Average daily percent change across a sector's instruments."""

    sector: str
    change: float


class MarketSummary(FrozenModel):
    """Breadth summary over an instrument universe.

    :param advancers: Instruments with a positive change.
    :param decliners: Instruments with a negative change.
    :param unchanged: Instruments with no change.
    :param total_volume: Sum of instrument volumes.
    :param trend: Overall direction derived from breadth.
    """

    advancers: int
    decliners: int
    unchanged: int
    total_volume: float
    trend: Literal["bullish", "bearish", "neutral"]


class IndicatorMethod(FrozenModel):
    """Chart overlay that a user can apply, with its period bounds.

    :param id: Indicator kind computed by this overlay.
    :param name: Display name.
    :param description: Short description.
    :param default_period: Period used when none is given.
    :param min_period: Smallest accepted period.
    :param max_period: Largest accepted period.
    :param color: Line colour used by the chart.
    """

    id: IndicatorKind
    name: str
    description: str
    default_period: int = 20
    min_period: int = 5
    max_period: int = 200
    color: str = "rgba(75, 192, 192, 1)"


class TechnicalIndicator(FrozenModel):
    """Ranking heuristic as presented to a user.

    :param id: Ranking kind this entry describes.
    :param name: Display name.
    :param description: Short description.
    :param type: Family the indicator belongs to.
    """

    id: RankingKind
    name: str
    description: str
    type: Literal["momentum", "trend", "volatility", "volume"]


# ---------------------------------------------------------------------------
# Configuration Types
# ---------------------------------------------------------------------------


class IndexSpec(FrozenModel):
    """Generation parameters for one index series.

    :param name: Index name, used as the catalog key.
    :param base_value: Starting level the series oscillates around.
    :param volatility: Daily price spread, in index points.
    """

    name: str
    base_value: float
    volatility: float = 50.0


class CatalogConfig(FrozenModel):
    """Configuration for building a market repository.

    :param indices: Indices to generate series for.
    :param instruments: Instrument universe for ranking and sector views.
    :param random_seed: Base seed, or None for non-reproducible output.
    :param log_level: Logging level used by the command line.
    """

    indices: list[IndexSpec] = Field(default_factory=list)
    instruments: list[Instrument] = Field(default_factory=list)
    random_seed: int | None = None
    log_level: str = "WARNING"


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

__all__ = [
    # Base models
    "FrozenModel",
    # Enumerations
    "RangeToken",
    "IndicatorKind",
    "RankingKind",
    # Market data
    "Bar",
    "Series",
    "PricePoint",
    "ChangeSummary",
    # Instruments
    "Instrument",
    "IndexQuote",
    "SectorPerformance",
    "MarketSummary",
    "IndicatorMethod",
    "TechnicalIndicator",
    # Configuration
    "IndexSpec",
    "CatalogConfig",
]
