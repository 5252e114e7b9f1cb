"""
Configuration model and loading.

Provides the Pydantic BinConfig model with layered loading:
defaults < bin config file < env vars.
"""

from .env import load_layered_env
from .loader import (
    apply_env_overrides,
    get_default_config,
    load_config,
    load_config_file,
    parse_config_line,
)
from .models import DEFAULT_MAX_SIZE_MB, DEFAULT_RETENTION_DAYS, BinConfig

__all__ = [
    "BinConfig",
    "DEFAULT_MAX_SIZE_MB",
    "DEFAULT_RETENTION_DAYS",
    "apply_env_overrides",
    "get_default_config",
    "load_config",
    "load_config_file",
    "load_layered_env",
    "parse_config_line",
]
