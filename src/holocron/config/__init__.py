"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, env_str
from .errors import ConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .swapi import BootstrapConfig, SwapiConfig, get_bootstrap_config, get_swapi_config

__all__ = [
    "BootstrapConfig",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SwapiConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "env_str",
    "get_bootstrap_config",
    "get_database_config",
    "get_storage_config",
    "get_swapi_config",
]
