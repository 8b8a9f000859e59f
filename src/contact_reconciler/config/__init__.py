"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_float, optional_env_int, optional_env_str
from .errors import ConfigurationError, ThresholdOutOfRangeError
from .logging import configure_logging
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "ReconciliationConfig",
    "StorageConfig",
    "ThresholdOutOfRangeError",
    "configure_logging",
    "get_database_config",
    "get_reconciliation_config",
    "get_storage_config",
    "optional_env_float",
    "optional_env_int",
    "optional_env_str",
]
