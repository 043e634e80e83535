"""Synthetic market data and technical analysis engine."""

from marketlab.exceptions import MarketLabError

__all__ = ["MarketLabError"]
