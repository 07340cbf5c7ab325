"""
Runtime Configuration Module

Provides configuration loading and management for the query client.
"""

from .runtime import (
    QueryConfig,
    RuntimeConfig,
    SigningConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "QueryConfig",
    "RuntimeConfig",
    "SigningConfig",
    "get_default_config",
    "set_default_config",
]
