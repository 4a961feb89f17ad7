"""Global settings instance for Vinora.

This module provides a unified settings object that combines:
- Configuration from config.toml
- Secrets from secrets.env
- Environment variable overrides

The settings object provides a flat interface while internally using the
structured configuration.
"""

from pathlib import Path

from vinora.config.loader import load_config, load_secrets
from vinora.config.schema import SecretsConfig, VinoraConfig


class Settings:
    """Unified settings object combining config and secrets."""

    def __init__(
        self,
        config: VinoraConfig | None = None,
        secrets: SecretsConfig | None = None,
    ):
        """Initialize settings.

        Args:
            config: Optional VinoraConfig instance. If not provided, loads from file.
            secrets: Optional SecretsConfig instance. If not provided, loads from file.
        """
        self._config = config or load_config()
        self._secrets = secrets or load_secrets()

    @property
    def config(self) -> VinoraConfig:
        """Get the full configuration object."""
        return self._config

    @property
    def secrets(self) -> SecretsConfig:
        """Get the secrets configuration object."""
        return self._secrets

    # Application
    @property
    def app_name(self) -> str:
        return self._config.app_name

    @property
    def debug(self) -> bool:
        return self._config.server.debug

    # Server
    @property
    def host(self) -> str:
        return self._config.server.host

    @property
    def port(self) -> int:
        return self._config.server.port

    @property
    def cors_origins(self) -> list[str]:
        return self._config.server.cors_origins

    # Storage
    @property
    def data_dir(self) -> Path:
        return self._config.storage.data_dir

    @property
    def wines_file(self) -> Path:
        return self._config.storage.wines_file

    @property
    def transactions_file(self) -> Path:
        return self._config.storage.transactions_file

    # Ledger
    @property
    def default_low_stock_threshold(self) -> int:
        return self._config.ledger.default_low_stock_threshold

    @property
    def seed_on_empty(self) -> bool:
        return self._config.ledger.seed_on_empty

    # Advisor
    @property
    def advisor_enabled(self) -> bool:
        return self._config.advisor.enabled

    @property
    def advisor_model(self) -> str:
        return self._config.advisor.model

    @property
    def advisor_max_tokens(self) -> int:
        return self._config.advisor.max_tokens

    # Secrets
    @property
    def anthropic_api_key(self) -> str | None:
        return self._secrets.anthropic_api_key


# Global settings instance - lazily initialized
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance.

    The settings are loaded once and cached for subsequent calls.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance.

    This is primarily useful for testing to reload configuration.
    """
    global _settings
    _settings = None


class _SettingsProxy:
    """Proxy object that lazily loads settings on first access."""

    def __getattr__(self, name: str):
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return repr(get_settings())


settings = _SettingsProxy()
