"""Application configuration helpers."""

from __future__ import annotations

from .blob import PipelineConfiguration, parse_bool, parse_config_blob
from .env import env_float, optional_env_var, require_env_var, require_env_vars
from .errors import (
    ConfigurationError,
    ConfigurationNotInitializedError,
    MissingConfigurationError,
)
from .logging import TRACE_LOGGER_NAME, configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .store import HttpStoreConfig, get_http_store_config

__all__ = [
    "TRACE_LOGGER_NAME",
    "ConfigurationError",
    "ConfigurationNotInitializedError",
    "DatabaseConfig",
    "HttpStoreConfig",
    "MissingConfigurationError",
    "PipelineConfiguration",
    "StorageConfig",
    "configure_logging",
    "env_float",
    "get_database_config",
    "get_http_store_config",
    "get_storage_config",
    "optional_env_var",
    "parse_bool",
    "parse_config_blob",
    "require_env_var",
    "require_env_vars",
]
