import pytest
from pathlib import Path
from linkgenesis.core.config import GenesisConfig, load_config_from_env


def test_config_defaults():
    """Test that the configuration has expected defaults."""
    config = GenesisConfig()

    # Check home and derived paths
    assert config.home == Path.home() / ".linkgenesis"
    assert config.genesis_path == Path.home() / ".linkgenesis" / "config" / "genesis.json"
    assert config.priv_validator_path == Path.home() / ".linkgenesis" / "config" / "priv_validator.json"
    assert config.keystore_path == Path.home() / ".linkgenesis" / "keystore"

    # Check genesis defaults
    assert config.chain_id == ""
    assert config.on_line is False
    assert config.utc_genesis_time is False
    assert config.log_level == "INFO"


def test_explicit_paths_override_home(tmp_path):
    config = GenesisConfig(home=tmp_path, genesis_file=tmp_path / "g.json")

    assert config.genesis_path == tmp_path / "g.json"
    assert config.keystore_path == tmp_path / "keystore"


def test_config_override(monkeypatch):
    """Test that environment variables override defaults."""
    # Set environment variables
    monkeypatch.setenv("LINKGENESIS_HOME", "/tmp/linkgenesis-home")
    monkeypatch.setenv("LINKGENESIS_GENESIS_FILE", "/tmp/test_genesis.json")
    monkeypatch.setenv("LINKGENESIS_CHAIN_ID", "linkchain")
    monkeypatch.setenv("LINKGENESIS_ON_LINE", "true")
    monkeypatch.setenv("LINKGENESIS_UTC_GENESIS_TIME", "0")
    monkeypatch.setenv("LINKGENESIS_LOG_LEVEL", "debug")

    # Load config from environment
    config = load_config_from_env()

    # Check that values were overridden
    assert config.home == Path("/tmp/linkgenesis-home")
    assert config.genesis_path == Path("/tmp/test_genesis.json")
    assert config.keystore_path == Path("/tmp/linkgenesis-home/keystore")
    assert config.chain_id == "linkchain"
    assert config.on_line is True
    assert config.utc_genesis_time is False
    assert config.log_level == "DEBUG"


def test_config_validation():
    """Test that configuration values are validated."""
    # Test with invalid values
    with pytest.raises(ValueError):
        GenesisConfig(log_level="LOUD")

    with pytest.raises(ValueError):
        GenesisConfig(chain_id=" padded ")

    # Test with valid value
    config = GenesisConfig(chain_id="test-chain-abc123")
    assert config.chain_id == "test-chain-abc123"
