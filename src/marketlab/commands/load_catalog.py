"""Configuration loading for the market catalog.

Example config file (catalog.yaml):

    random_seed: 42
    log_level: "INFO"
    indices:
      - name: "S&P 500"
        base_value: 5000
        volatility: 50
      - name: "Nasdaq"
        base_value: 16300
        volatility: 100
    instruments:  # Optional, defaults to the built-in universe
      - symbol: "AAPL"
        name: "Apple Inc."
        price: 182.52
        change: 3.24
        changePercent: 1.81
        volume: 58.3
        marketCap: 2820
        pe: 30.2
        sector: "Technology"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from marketlab.data.catalog import DEFAULT_INSTRUMENTS
from marketlab.exceptions import ConfigError
from marketlab.types import CatalogConfig, IndexSpec, Instrument

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = frozenset([
    "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL",
])


def _parse_index_spec(raw: Any, position: int) -> IndexSpec:
    """Validate a single index entry.

    :param raw: Mapping from the YAML file.
    :param position: Index of the entry, for error messages.
    :returns: Parsed IndexSpec.
    :raises ConfigError: If the entry is invalid.
    """
    if not isinstance(raw, dict):
        raise ConfigError(f"'indices[{position}]' must be a mapping")

    for field in ("name", "base_value"):
        if field not in raw:
            raise ConfigError(f"'indices[{position}]' missing required field: {field}")

    base_value = raw["base_value"]
    if (
        not isinstance(base_value, (int, float))
        or isinstance(base_value, bool)
        or base_value <= 0
    ):
        raise ConfigError(f"'indices[{position}].base_value' must be a positive number")

    volatility = raw.get("volatility", 50.0)
    if (
        not isinstance(volatility, (int, float))
        or isinstance(volatility, bool)
        or volatility < 0
    ):
        raise ConfigError(f"'indices[{position}].volatility' must be a non-negative number")

    return IndexSpec(name=str(raw["name"]), base_value=base_value, volatility=volatility)


def _parse_instruments(raw: Any) -> list[Instrument]:
    if not isinstance(raw, list):
        raise ConfigError("'instruments' must be a list")
    instruments = []
    for position, entry in enumerate(raw):
        try:
            instruments.append(Instrument.model_validate(entry))
        except ValidationError as e:
            raise ConfigError(f"Invalid instrument at position {position}: {e}") from e
    return instruments


def load_catalog_config(config_path: str | Path) -> CatalogConfig:
    """Parse and validate a catalog configuration file.

    :param config_path: Path to YAML configuration file.
    :returns: Validated CatalogConfig object.
    :raises ConfigError: If file cannot be read or config is invalid.
    """
    config_path = Path(config_path)

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError("Configuration must be a YAML mapping")

    if "indices" not in raw_config:
        raise ConfigError("Missing required field: indices")

    raw_indices = raw_config["indices"]
    if not isinstance(raw_indices, list) or len(raw_indices) == 0:
        raise ConfigError("'indices' must be a non-empty list")
    indices = [_parse_index_spec(raw, i) for i, raw in enumerate(raw_indices)]

    names = [spec.name for spec in indices]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ConfigError(f"Duplicate index names: {duplicates}")

    if "instruments" in raw_config:
        instruments = _parse_instruments(raw_config["instruments"])
    else:
        instruments = list(DEFAULT_INSTRUMENTS)

    random_seed: int | None = raw_config.get("random_seed")
    if random_seed is not None and (
        not isinstance(random_seed, int) or isinstance(random_seed, bool)
    ):
        raise ConfigError("'random_seed' must be an integer")

    log_level = str(raw_config.get("log_level", "WARNING")).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"Invalid log_level '{log_level}'. "
            f"Valid options: {sorted(VALID_LOG_LEVELS)}"
        )

    logger.debug("Loaded catalog config from %s", config_path)

    return CatalogConfig(
        indices=indices,
        instruments=instruments,
        random_seed=random_seed,
        log_level=log_level,
    )
