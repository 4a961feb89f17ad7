"""Pydantic models for Vinora configuration.

These models define the structure of config.toml and secrets.env files.
"""

from pathlib import Path

from pydantic import BaseModel, Field


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    # CORS configuration - empty list means same-origin only
    cors_origins: list[str] = []


class StorageConfig(BaseModel):
    """Snapshot storage configuration."""

    data_dir: Path = Field(default_factory=lambda: Path("data"))

    @property
    def wines_file(self) -> Path:
        """Get the wine collection snapshot path."""
        return self.data_dir / "wines.json"

    @property
    def transactions_file(self) -> Path:
        """Get the transaction log snapshot path."""
        return self.data_dir / "transactions.json"


class LedgerConfig(BaseModel):
    """Stock ledger configuration."""

    default_low_stock_threshold: int = Field(default=6, ge=0)
    seed_on_empty: bool = True


class AdvisorConfig(BaseModel):
    """Text-generation advisor configuration."""

    enabled: bool = True
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 512


class VinoraConfig(BaseModel):
    """Main Vinora configuration loaded from config.toml."""

    app_name: str = "Vinora"
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    advisor: AdvisorConfig = Field(default_factory=AdvisorConfig)


class SecretsConfig(BaseModel):
    """Secrets loaded from secrets.env file.

    These are sensitive values that should not be stored in config.toml.
    """

    anthropic_api_key: str | None = None
