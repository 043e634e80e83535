"""Configuration loading for the command line.

Each command module provides:
- Configuration loading and validation
- Conversion into the core library's typed models
"""

from marketlab.commands.load_catalog import load_catalog_config

__all__ = [
    "load_catalog_config",
]
