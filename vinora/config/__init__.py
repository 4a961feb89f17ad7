"""Vinora configuration module.

This module provides TOML-based configuration with environment variable overrides.

Configuration is loaded from the following locations (in order of priority):
1. Environment variables (highest priority)
2. ./config.toml (project root - for development)
3. ~/.config/vinora/config.toml (user config)
4. /etc/vinora/config.toml (system config)

Secrets are loaded from secrets.env files in the same directories.
"""

from vinora.config.schema import (
    AdvisorConfig,
    LedgerConfig,
    SecretsConfig,
    ServerConfig,
    StorageConfig,
    VinoraConfig,
)
from vinora.config.settings import get_settings, reset_settings, settings

__all__ = [
    "AdvisorConfig",
    "LedgerConfig",
    "SecretsConfig",
    "ServerConfig",
    "StorageConfig",
    "VinoraConfig",
    "get_settings",
    "reset_settings",
    "settings",
]
