"""Market analytics exception hierarchy.

All package-specific exceptions derive from :class:`MarketLabError` so callers
can catch every analytics-related error uniformly.
"""

from __future__ import annotations


class MarketLabError(Exception):
    """Base class for market analytics exceptions.

    Derived exceptions should extend this class so that callers can catch all
    package-specific errors uniformly.
    """


class ConfigError(MarketLabError):
    """Raised when configuration files or parameters are invalid."""


class CatalogError(MarketLabError):
    """Raised when a catalog lookup fails (unknown index or instrument)."""


class DataValidationError(MarketLabError):
    """Raised when data fails validation checks.

    Named DataValidationError to avoid conflict with pydantic's ValidationError.
    """


class InvalidRangeTokenError(MarketLabError, ValueError):
    """Raised when a range token is not one of the supported windows."""


class UnknownIndicatorError(MarketLabError, ValueError):
    """Raised when an indicator kind cannot be resolved."""


__all__ = [
    "MarketLabError",
    "ConfigError",
    "CatalogError",
    "DataValidationError",
    "InvalidRangeTokenError",
    "UnknownIndicatorError",
]
