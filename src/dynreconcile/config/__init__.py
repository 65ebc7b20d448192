"""Application configuration helpers."""

from __future__ import annotations

from .env import env_flag, env_list, load_env_file, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging, resolve_log_level
from .reconcile import get_reconcile_options
from .store import StoreConfig, build_store_resilience, get_store_config

__all__ = [
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StoreConfig",
    "build_store_resilience",
    "configure_logging",
    "env_flag",
    "env_list",
    "get_reconcile_options",
    "get_store_config",
    "load_env_file",
    "require_env_var",
    "require_env_vars",
    "resolve_log_level",
]
