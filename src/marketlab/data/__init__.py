"""Synthetic series generation and the market catalog."""

from marketlab.data.catalog import (
    MarketRepository,
    default_catalog_config,
    summarize_market,
)
from marketlab.data.generator import (
    SERIES_LENGTH,
    SeriesGenerator,
    derive_seed,
    generate_series,
)

__all__ = [
    "SERIES_LENGTH",
    "SeriesGenerator",
    "derive_seed",
    "generate_series",
    "MarketRepository",
    "default_catalog_config",
    "summarize_market",
]
