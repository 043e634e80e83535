"""Read-only market repository built once from a catalog configuration.

The repository generates one series per configured index (each from its own
derived seed), generates stock series on demand, caches them, and serves price
points, quotes and sector views over the instrument universe.
"""

from __future__ import annotations

import logging
from datetime import date

from marketlab.analytics.ranges import compute_change, to_price_points
from marketlab.data.generator import SERIES_LENGTH, SeriesGenerator, derive_seed
from marketlab.exceptions import CatalogError
from marketlab.types import (
    CatalogConfig,
    IndexQuote,
    IndexSpec,
    Instrument,
    MarketSummary,
    PricePoint,
    SectorPerformance,
    Series,
)

logger = logging.getLogger(__name__)

DEFAULT_INDICES = [
    IndexSpec(name="S&P 500", base_value=5000, volatility=50),
    IndexSpec(name="Dow Jones", base_value=39800, volatility=200),
    IndexSpec(name="Nasdaq", base_value=16300, volatility=100),
    IndexSpec(name="Russell 2000", base_value=2100, volatility=25),
]

DEFAULT_INSTRUMENTS = [
    Instrument(symbol="AAPL", name="Apple Inc.", price=182.52, change=3.24,
               change_percent=1.81, volume=58.3, market_cap=2820, pe=30.2,
               sector="Technology"),
    Instrument(symbol="MSFT", name="Microsoft Corporation", price=425.27, change=7.89,
               change_percent=1.89, volume=23.7, market_cap=3160, pe=37.4,
               sector="Technology"),
    Instrument(symbol="GOOGL", name="Alphabet Inc.", price=175.98, change=2.13,
               change_percent=1.23, volume=19.8, market_cap=2180, pe=25.1,
               sector="Technology"),
    Instrument(symbol="AMZN", name="Amazon.com Inc.", price=182.41, change=3.78,
               change_percent=2.12, volume=32.5, market_cap=1890, pe=47.3,
               sector="Consumer Cyclical"),
    Instrument(symbol="NVDA", name="NVIDIA Corporation", price=924.79, change=23.45,
               change_percent=2.6, volume=41.2, market_cap=2280, pe=68.5,
               sector="Technology"),
    Instrument(symbol="META", name="Meta Platforms Inc.", price=511.32, change=8.76,
               change_percent=1.74, volume=17.9, market_cap=1310, pe=29.8,
               sector="Technology"),
    Instrument(symbol="TSLA", name="Tesla Inc.", price=175.21, change=-3.42,
               change_percent=-1.91, volume=98.7, market_cap=557, pe=48.2,
               sector="Automotive"),
    Instrument(symbol="BRK.A", name="Berkshire Hathaway Inc.", price=621430.0, change=4320.0,
               change_percent=0.7, volume=0.001, market_cap=741, pe=10.8,
               sector="Financial Services"),
    Instrument(symbol="JPM", name="JPMorgan Chase & Co.", price=198.47, change=1.23,
               change_percent=0.62, volume=8.9, market_cap=572, pe=12.1,
               sector="Financial Services"),
    Instrument(symbol="V", name="Visa Inc.", price=278.34, change=2.87,
               change_percent=1.04, volume=6.3, market_cap=567, pe=31.4,
               sector="Financial Services"),
]


def default_catalog_config(random_seed: int | None = None) -> CatalogConfig:
    """Catalog with the four US headline indices and ten large-cap stocks."""
    return CatalogConfig(
        indices=list(DEFAULT_INDICES),
        instruments=list(DEFAULT_INSTRUMENTS),
        random_seed=random_seed,
    )


def summarize_market(universe: list[Instrument]) -> MarketSummary:
    """Breadth counts, total volume and trend over a universe.

    The trend is bullish when advancers outnumber decliners, bearish in the
    opposite case and neutral on a tie.
    """
    advancers = sum(1 for i in universe if i.change_percent > 0)
    decliners = sum(1 for i in universe if i.change_percent < 0)
    if advancers > decliners:
        trend = "bullish"
    elif decliners > advancers:
        trend = "bearish"
    else:
        trend = "neutral"
    return MarketSummary(
        advancers=advancers,
        decliners=decliners,
        unchanged=len(universe) - advancers - decliners,
        total_volume=round(sum(i.volume for i in universe), 3),
        trend=trend,
    )


# Daily spread of a synthetic stock series, as a fraction of its price
STOCK_VOLATILITY_FRACTION = 0.02

# Stock bar volume is scaled by the instrument's volume over this divisor
STOCK_VOLUME_DIVISOR = 10


class MarketRepository:
    """Catalog of generated index series, stock series and an instrument universe.

    Index series are generated by :meth:`build`. Stock series are generated on
    first request and cached, each from its own seed derived from the symbol.

    :param series: Generated series keyed by index name.
    :param instruments: Instrument universe.
    :param random_seed: Base seed for stock series.
    :param end: Date of the most recent bar of stock series.
    :param length: Bars per stock series.
    """

    def __init__(
        self,
        series: dict[str, Series],
        instruments: list[Instrument],
        random_seed: int | None = None,
        end: date | None = None,
        length: int = SERIES_LENGTH,
    ) -> None:
        self._series = dict(series)
        self._instruments = tuple(instruments)
        self._stock_series: dict[str, Series] = {}
        self._random_seed = random_seed
        self._end = end or date.today()
        self._length = length

    @classmethod
    def build(
        cls,
        config: CatalogConfig,
        end: date | None = None,
        length: int = SERIES_LENGTH,
    ) -> "MarketRepository":
        """Generate every configured index series once.

        :param config: Catalog configuration.
        :param end: Date of the most recent bar (today by default).
        :param length: Bars per series.
        :returns: Populated repository.
        """
        end = end or date.today()
        series: dict[str, Series] = {}
        for spec in config.indices:
            seed = derive_seed(config.random_seed, spec.name)
            generator = SeriesGenerator(seed=seed, length=length)
            series[spec.name] = generator.generate(
                spec.base_value, spec.volatility, name=spec.name, end=end
            )
        logger.info(
            "Built market catalog: %d indices, %d instruments",
            len(series),
            len(config.instruments),
        )
        return cls(
            series,
            config.instruments,
            random_seed=config.random_seed,
            end=end,
            length=length,
        )

    def index_names(self) -> list[str]:
        return list(self._series)

    def get_series(self, name: str) -> Series:
        """Look up a generated series by index name.

        :raises CatalogError: If no index with that name exists.
        """
        try:
            return self._series[name]
        except KeyError as e:
            raise CatalogError(
                f"Unknown index '{name}'. Available: {self.index_names()}"
            ) from e

    def get_price_points(self, name: str) -> list[PricePoint]:
        return to_price_points(self.get_series(name))

    def get_instrument(self, symbol_or_name: str) -> Instrument:
        """Look up an instrument by symbol or company name, case-insensitively.

        :raises CatalogError: If no instrument matches.
        """
        wanted = symbol_or_name.lower()
        for instrument in self._instruments:
            if instrument.symbol.lower() == wanted or instrument.name.lower() == wanted:
                return instrument
        raise CatalogError(f"Unknown instrument '{symbol_or_name}'")

    def get_stock_series(self, symbol_or_name: str) -> Series:
        """Daily series for one instrument, generated on first request.

        The series starts from the instrument's price with a spread of
        ``STOCK_VOLATILITY_FRACTION`` of that price, and bar volumes are
        scaled by the instrument's volume over ``STOCK_VOLUME_DIVISOR``.

        :raises CatalogError: If no instrument matches.
        """
        instrument = self.get_instrument(symbol_or_name)
        cached = self._stock_series.get(instrument.symbol)
        if cached is not None:
            return cached

        seed = derive_seed(self._random_seed, instrument.symbol)
        generator = SeriesGenerator(seed=seed, length=self._length)
        series = generator.generate(
            instrument.price,
            instrument.price * STOCK_VOLATILITY_FRACTION,
            name=instrument.symbol,
            end=self._end,
            volume_scale=instrument.volume / STOCK_VOLUME_DIVISOR,
        )
        self._stock_series[instrument.symbol] = series
        logger.debug("Cached stock series for %s", instrument.symbol)
        return series

    def get_stock_price_points(self, symbol_or_name: str) -> list[PricePoint]:
        return to_price_points(self.get_stock_series(symbol_or_name))

    def get_index_quote(self, name: str) -> IndexQuote:
        """Latest close of an index and its change from the previous close."""
        points = self.get_price_points(name)
        change = compute_change(points[-2:])
        return IndexQuote(
            name=name,
            value=points[-1].price if points else 0.0,
            change=round(change.absolute, 2),
            change_percent=round(change.percent, 2),
        )

    def instruments(self, sector: str | None = None) -> list[Instrument]:
        """Instrument universe, optionally restricted to one sector.

        Sector names match case-insensitively.
        """
        if sector is None:
            return list(self._instruments)
        wanted = sector.lower()
        return [i for i in self._instruments if i.sector.lower() == wanted]

    def sectors(self) -> list[str]:
        """Distinct sector names in first-seen order.

        Names differing only in case count once, under their first spelling.
        """
        seen: dict[str, str] = {}
        for instrument in self._instruments:
            seen.setdefault(instrument.sector.lower(), instrument.sector)
        return list(seen.values())

    def sector_performance(self) -> list[SectorPerformance]:
        """Mean percent change per sector."""
        result = []
        for sector in self.sectors():
            members = self.instruments(sector)
            mean = sum(i.change_percent for i in members) / len(members)
            result.append(SectorPerformance(sector=sector, change=round(mean, 2)))
        return result

    def market_summary(self) -> MarketSummary:
        return summarize_market(list(self._instruments))


__all__ = [
    "DEFAULT_INDICES",
    "DEFAULT_INSTRUMENTS",
    "MarketRepository",
    "STOCK_VOLATILITY_FRACTION",
    "STOCK_VOLUME_DIVISOR",
    "default_catalog_config",
    "summarize_market",
]
