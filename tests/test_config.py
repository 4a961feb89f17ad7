"""Tests for the Vinora configuration system."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from vinora.config.loader import (
    apply_env_overrides,
    find_config_file,
    find_secrets_file,
    get_config_search_paths,
    get_secrets_search_paths,
    load_config,
    load_secrets,
    load_toml_file,
    parse_env_file,
)
from vinora.config.schema import (
    AdvisorConfig,
    LedgerConfig,
    SecretsConfig,
    ServerConfig,
    StorageConfig,
    VinoraConfig,
)
from vinora.config.settings import Settings, get_settings, reset_settings


class TestSchemaDefaults:
    """Test default values in schema models."""

    def test_server_config_defaults(self):
        """Test ServerConfig has correct defaults."""
        config = ServerConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.cors_origins == []

    def test_storage_config_defaults(self):
        """Test StorageConfig has correct defaults."""
        config = StorageConfig()
        assert config.data_dir == Path("data")
        assert config.wines_file == Path("data/wines.json")
        assert config.transactions_file == Path("data/transactions.json")

    def test_ledger_config_defaults(self):
        """Test LedgerConfig has correct defaults."""
        config = LedgerConfig()
        assert config.default_low_stock_threshold == 6
        assert config.seed_on_empty is True

    def test_ledger_config_rejects_negative_threshold(self):
        """Test the default threshold cannot be negative."""
        with pytest.raises(ValidationError):
            LedgerConfig(default_low_stock_threshold=-1)

    def test_advisor_config_defaults(self):
        """Test AdvisorConfig has correct defaults."""
        config = AdvisorConfig()
        assert config.enabled is True
        assert config.model.startswith("claude-")
        assert config.max_tokens == 512

    def test_vinora_config_defaults(self):
        """Test VinoraConfig has correct defaults."""
        config = VinoraConfig()
        assert config.app_name == "Vinora"
        assert isinstance(config.server, ServerConfig)
        assert isinstance(config.storage, StorageConfig)
        assert isinstance(config.ledger, LedgerConfig)
        assert isinstance(config.advisor, AdvisorConfig)

    def test_secrets_config_defaults(self):
        """Test SecretsConfig has correct defaults."""
        assert SecretsConfig().anthropic_api_key is None


class TestConfigSearchPaths:
    """Test configuration file search paths."""

    def test_config_search_paths_order(self):
        """Test config search paths are in correct priority order."""
        paths = get_config_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "config.toml"
        assert paths[1] == Path.home() / ".config" / "vinora" / "config.toml"
        assert paths[2] == Path("/etc/vinora/config.toml")

    def test_secrets_search_paths_order(self):
        """Test secrets search paths are in correct priority order."""
        paths = get_secrets_search_paths()
        assert len(paths) == 3
        assert paths[0] == Path.cwd() / "secrets.env"
        assert paths[1] == Path.home() / ".config" / "vinora" / "secrets.env"
        assert paths[2] == Path("/etc/vinora/secrets.env")


class TestTomlLoading:
    """Test TOML file loading."""

    def test_load_toml_file(self, tmp_path):
        """Test loading a valid TOML file."""
        toml_content = """
app_name = "TestApp"

[server]
host = "0.0.0.0"
port = 9000
debug = true

[storage]
data_dir = "/var/lib/vinora"
"""
        config_file = tmp_path / "config.toml"
        config_file.write_text(toml_content)

        data = load_toml_file(config_file)
        assert data["app_name"] == "TestApp"
        assert data["server"]["host"] == "0.0.0.0"
        assert data["server"]["port"] == 9000
        assert data["server"]["debug"] is True
        assert data["storage"]["data_dir"] == "/var/lib/vinora"

    def test_load_config_from_file(self, tmp_path):
        """Test load_config with a specific file."""
        toml_content = """
app_name = "Cave du Port"

[ledger]
default_low_stock_threshold = 10
seed_on_empty = false

[advisor]
enabled = false
"""
        config_file = tmp_path / "config.toml"
        config_file.write_text(toml_content)

        config = load_config(config_file)
        assert config.app_name == "Cave du Port"
        assert config.ledger.default_low_stock_threshold == 10
        assert config.ledger.seed_on_empty is False
        assert config.advisor.enabled is False
        # Defaults should still apply
        assert config.server.host == "127.0.0.1"
        assert config.storage.data_dir == Path("data")


class TestEnvFileParsing:
    """Test .env file parsing."""

    def test_parse_simple_env_file(self, tmp_path):
        """Test parsing a simple .env file."""
        env_content = """
VINORA_ANTHROPIC_API_KEY=sk-ant-file
OTHER_KEY=other
"""
        env_file = tmp_path / "secrets.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result["VINORA_ANTHROPIC_API_KEY"] == "sk-ant-file"
        assert result["OTHER_KEY"] == "other"

    def test_parse_env_file_with_quotes(self, tmp_path):
        """Test parsing .env file with quoted values."""
        env_content = '''
KEY1="double quoted value"
KEY2='single quoted value'
KEY3=unquoted value
'''
        env_file = tmp_path / "test.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result["KEY1"] == "double quoted value"
        assert result["KEY2"] == "single quoted value"
        assert result["KEY3"] == "unquoted value"

    def test_parse_env_file_skips_comments_and_blank_lines(self, tmp_path):
        """Test that comments and empty lines are skipped."""
        env_content = """
# This is a comment
KEY1=value1

# Another comment
KEY2=value2
"""
        env_file = tmp_path / "test.env"
        env_file.write_text(env_content)

        result = parse_env_file(env_file)
        assert result == {"KEY1": "value1", "KEY2": "value2"}


class TestEnvOverrides:
    """Test environment variable overrides."""

    def test_apply_server_overrides(self):
        """Test server configuration overrides."""
        config_dict = {}

        with patch.dict(os.environ, {"VINORA_HOST": "0.0.0.0", "VINORA_PORT": "3000"}):
            apply_env_overrides(config_dict)

        assert config_dict["server"]["host"] == "0.0.0.0"
        assert config_dict["server"]["port"] == 3000

    def test_apply_storage_and_ledger_overrides(self):
        """Test data directory and threshold overrides."""
        config_dict = {}

        with patch.dict(
            os.environ,
            {
                "VINORA_DATA_DIR": "/srv/cave",
                "VINORA_LEDGER_DEFAULT_LOW_STOCK_THRESHOLD": "12",
            },
        ):
            apply_env_overrides(config_dict)

        assert config_dict["storage"]["data_dir"] == "/srv/cave"
        assert config_dict["ledger"]["default_low_stock_threshold"] == 12

    def test_apply_boolean_override_true(self):
        """Test boolean overrides with 'true' value."""
        config_dict = {}

        with patch.dict(os.environ, {"VINORA_DEBUG": "true"}):
            apply_env_overrides(config_dict)

        assert config_dict["server"]["debug"] is True

    def test_apply_boolean_override_false(self):
        """Test boolean overrides with 'false' value."""
        config_dict = {"advisor": {"enabled": True}}

        with patch.dict(os.environ, {"VINORA_ADVISOR_ENABLED": "false"}):
            apply_env_overrides(config_dict)

        assert config_dict["advisor"]["enabled"] is False

    def test_env_overrides_file_values(self, tmp_path):
        """Test environment variables beat the config file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[server]\nport = 5000\n")

        with patch.dict(os.environ, {"VINORA_SERVER_PORT": "6000"}):
            config = load_config(config_file)

        assert config.server.port == 6000


class TestSecretsLoading:
    """Test secrets loading."""

    def test_load_secrets_from_file(self, tmp_path, monkeypatch):
        """Test loading secrets from a file."""
        monkeypatch.delenv("VINORA_ANTHROPIC_API_KEY", raising=False)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("VINORA_ANTHROPIC_API_KEY=sk-ant-api-key\n")

        secrets = load_secrets(secrets_file)
        assert secrets.anthropic_api_key == "sk-ant-api-key"

    def test_load_secrets_env_override(self, tmp_path):
        """Test environment variables override file secrets."""
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("VINORA_ANTHROPIC_API_KEY=file-key\n")

        with patch.dict(os.environ, {"VINORA_ANTHROPIC_API_KEY": "env-key"}):
            secrets = load_secrets(secrets_file)

        assert secrets.anthropic_api_key == "env-key"

    def test_load_secrets_anthropic_key_alias(self, tmp_path, monkeypatch):
        """Test ANTHROPIC_API_KEY is also checked."""
        monkeypatch.delenv("VINORA_ANTHROPIC_API_KEY", raising=False)
        with patch.dict(os.environ, {"ANTHROPIC_API_KEY": "sk-common-name"}):
            secrets = load_secrets(tmp_path / "nonexistent.env")

        assert secrets.anthropic_api_key == "sk-common-name"


class TestSettings:
    """Test the Settings class."""

    def setup_method(self):
        """Reset settings before each test."""
        reset_settings()

    def test_settings_property_accessors(self):
        """Test all property accessors work correctly."""
        config = VinoraConfig(
            app_name="TestApp",
            server=ServerConfig(host="0.0.0.0", port=9000),
            storage=StorageConfig(data_dir=Path("/tmp/cave")),
            ledger=LedgerConfig(default_low_stock_threshold=8, seed_on_empty=False),
            advisor=AdvisorConfig(enabled=False, max_tokens=256),
        )
        secrets = SecretsConfig(anthropic_api_key="sk-test")
        settings = Settings(config=config, secrets=secrets)

        assert settings.app_name == "TestApp"
        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
        assert settings.data_dir == Path("/tmp/cave")
        assert settings.wines_file == Path("/tmp/cave/wines.json")
        assert settings.transactions_file == Path("/tmp/cave/transactions.json")
        assert settings.default_low_stock_threshold == 8
        assert settings.seed_on_empty is False
        assert settings.advisor_enabled is False
        assert settings.advisor_max_tokens == 256
        assert settings.anthropic_api_key == "sk-test"

    def test_get_settings_singleton(self):
        """Test get_settings returns same instance."""
        s1 = get_settings()
        s2 = get_settings()
        assert s1 is s2

    def test_reset_settings_clears_cache(self):
        """Test reset_settings clears the cached instance."""
        s1 = get_settings()
        reset_settings()
        s2 = get_settings()
        assert s1 is not s2


class TestFindConfigFile:
    """Test find_config_file function."""

    def test_find_config_file_in_cwd(self, tmp_path, monkeypatch):
        """Test finding config file in current directory."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[server]\nport = 8000\n")

        monkeypatch.chdir(tmp_path)
        assert find_config_file() == config_file


class TestFindSecretsFile:
    """Test find_secrets_file function."""

    def test_find_secrets_file_in_cwd(self, tmp_path, monkeypatch):
        """Test finding secrets file in current directory."""
        secrets_file = tmp_path / "secrets.env"
        secrets_file.write_text("VINORA_ANTHROPIC_API_KEY=test\n")

        monkeypatch.chdir(tmp_path)
        assert find_secrets_file() == secrets_file
