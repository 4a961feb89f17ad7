"""Configuration loader for Vinora.

Loads configuration from TOML files and secrets from .env files.
Environment variables can override any configuration value.
"""

import logging
import os
from pathlib import Path
from typing import Any

from vinora.config.schema import SecretsConfig, VinoraConfig

logger = logging.getLogger(__name__)

# Try to import tomllib (Python 3.11+) or fall back to tomli
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found]

# Env var -> (section, key)
ENV_MAPPINGS: dict[str, tuple[str, str]] = {
    # Server
    "SERVER_HOST": ("server", "host"),
    "SERVER_PORT": ("server", "port"),
    "SERVER_DEBUG": ("server", "debug"),
    "DEBUG": ("server", "debug"),  # Shorthand
    "HOST": ("server", "host"),  # Shorthand
    "PORT": ("server", "port"),  # Shorthand
    # Storage
    "STORAGE_DATA_DIR": ("storage", "data_dir"),
    "DATA_DIR": ("storage", "data_dir"),  # Shorthand
    # Ledger
    "LEDGER_DEFAULT_LOW_STOCK_THRESHOLD": ("ledger", "default_low_stock_threshold"),
    "LEDGER_SEED_ON_EMPTY": ("ledger", "seed_on_empty"),
    # Advisor
    "ADVISOR_ENABLED": ("advisor", "enabled"),
    "ADVISOR_MODEL": ("advisor", "model"),
    "ADVISOR_MAX_TOKENS": ("advisor", "max_tokens"),
}

INT_KEYS = ("port", "default_low_stock_threshold", "max_tokens")
BOOL_KEYS = ("debug", "seed_on_empty", "enabled")


def get_config_search_paths() -> list[Path]:
    """Get the list of paths to search for configuration files.

    Returns paths in priority order (first found wins):
    1. ./config.toml (project root - for development)
    2. ~/.config/vinora/config.toml (user config)
    3. /etc/vinora/config.toml (system config)
    """
    return [
        Path.cwd() / "config.toml",
        Path.home() / ".config" / "vinora" / "config.toml",
        Path("/etc/vinora/config.toml"),
    ]


def get_secrets_search_paths() -> list[Path]:
    """Get the list of paths to search for secrets files, in priority order."""
    return [
        Path.cwd() / "secrets.env",
        Path.home() / ".config" / "vinora" / "secrets.env",
        Path("/etc/vinora/secrets.env"),
    ]


def find_config_file() -> Path | None:
    """Find the first existing config file from search paths."""
    for path in get_config_search_paths():
        if path.exists() and path.is_file():
            logger.debug(f"Found config file: {path}")
            return path
    return None


def find_secrets_file() -> Path | None:
    """Find the first existing secrets file from search paths."""
    for path in get_secrets_search_paths():
        if path.exists() and path.is_file():
            logger.debug(f"Found secrets file: {path}")
            return path
    return None


def load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents as a dictionary."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a simple .env file into a dictionary.

    Supports:
    - KEY=value
    - KEY="quoted value"
    - # comments
    - Empty lines
    """
    env_vars: dict[str, str] = {}

    with open(path) as f:
        for line in f:
            line = line.strip()

            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()

            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]

            env_vars[key] = value

    return env_vars


def apply_env_overrides(config_dict: dict[str, Any], prefix: str = "VINORA") -> None:
    """Apply environment variable overrides to configuration dictionary.

    Environment variables are mapped as follows:
    - VINORA_SERVER_PORT -> config_dict["server"]["port"]
    - VINORA_DATA_DIR -> config_dict["storage"]["data_dir"]
    - etc.

    Note: This modifies config_dict in place.
    """
    for suffix, (section, key) in ENV_MAPPINGS.items():
        value = os.environ.get(f"{prefix}_{suffix}")
        if value is None:
            continue

        section_dict = config_dict.setdefault(section, {})

        if key in INT_KEYS:
            section_dict[key] = int(value)
        elif key in BOOL_KEYS:
            section_dict[key] = value.lower() in ("true", "1", "yes")
        else:
            section_dict[key] = value


def load_secrets(secrets_file: Path | None = None) -> SecretsConfig:
    """Load secrets from environment variables and optional secrets.env file.

    Environment variables take precedence over file values.
    """
    secrets_dict: dict[str, str | None] = {}

    if secrets_file is None:
        secrets_file = find_secrets_file()

    key_mapping = {
        "VINORA_ANTHROPIC_API_KEY": "anthropic_api_key",
        "ANTHROPIC_API_KEY": "anthropic_api_key",
    }

    if secrets_file and secrets_file.exists():
        logger.info(f"Loading secrets from: {secrets_file}")
        file_secrets = parse_env_file(secrets_file)
        for file_key, config_key in key_mapping.items():
            if file_secrets.get(file_key) and config_key not in secrets_dict:
                secrets_dict[config_key] = file_secrets[file_key]

    for env_var, config_key in key_mapping.items():
        value = os.environ.get(env_var)
        if value:
            secrets_dict[config_key] = value
            break

    return SecretsConfig(**secrets_dict)


def load_config(config_file: Path | None = None) -> VinoraConfig:
    """Load configuration from TOML file with environment variable overrides.

    Args:
        config_file: Optional path to config file. If not provided,
                     searches default locations.

    Returns:
        VinoraConfig instance with all settings loaded.
    """
    config_dict: dict[str, Any] = {}

    if config_file is None:
        config_file = find_config_file()

    if config_file and config_file.exists():
        logger.info(f"Loading config from: {config_file}")
        config_dict = load_toml_file(config_file)
    else:
        logger.info("No config file found, using defaults with env overrides")

    apply_env_overrides(config_dict)

    return VinoraConfig(**config_dict)
