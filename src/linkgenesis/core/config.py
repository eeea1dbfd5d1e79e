from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class GenesisConfig(BaseModel):
    """Configuration for genesis loading and node initialisation.

    This model loads configuration from environment variables and defaults.
    """
    # Node home directory
    home: Path = Field(
        default=Path.home() / ".linkgenesis",
        description="Root directory holding config and keystore files"
    )

    # Genesis Configuration
    genesis_file: Optional[Path] = Field(
        default=None,
        description="Path to the genesis file, defaults to <home>/config/genesis.json"
    )
    chain_id: str = Field(
        default="",
        description="Chain id used when generating a new genesis file"
    )
    utc_genesis_time: bool = Field(
        default=False,
        description="Fill an empty genesis_time with RFC3339 UTC instead of local time"
    )

    # Validator Key Configuration
    priv_validator_file: Optional[Path] = Field(
        default=None,
        description="Path to the private validator key, defaults to <home>/config/priv_validator.json"
    )

    # Test Credential Configuration
    keystore_dir: Optional[Path] = Field(
        default=None,
        description="Directory receiving the test keystores, defaults to <home>/keystore"
    )
    on_line: bool = Field(
        default=False,
        description="Production mode: no test keystores and no test pre-funding"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level name for the command line"
    )

    @field_validator('chain_id')
    def validate_chain_id(cls, value):
        """Validate chain id has no surrounding whitespace."""
        if value != value.strip():
            raise ValueError("Chain id must not have leading or trailing whitespace")
        return value

    @field_validator('log_level')
    def validate_log_level(cls, value):
        """Validate log level is a known level name."""
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @property
    def genesis_path(self) -> Path:
        return self.genesis_file or self.home / "config" / "genesis.json"

    @property
    def priv_validator_path(self) -> Path:
        return self.priv_validator_file or self.home / "config" / "priv_validator.json"

    @property
    def keystore_path(self) -> Path:
        return self.keystore_dir or self.home / "keystore"

    model_config = {
        "env_prefix": "LINKGENESIS_",
        "arbitrary_types_allowed": True,
        "validate_assignment": True,
    }


# Global config instance with default values
config = GenesisConfig()

def load_config_from_env() -> GenesisConfig:
    """Load configuration from environment variables.

    Returns:
        GenesisConfig: Configuration instance with values from environment
    """
    import os

    # Create a dict of settings from environment variables
    env_settings = {}

    # Map environment variables to config fields
    env_mappings = {
        "LINKGENESIS_HOME": "home",
        "LINKGENESIS_GENESIS_FILE": "genesis_file",
        "LINKGENESIS_CHAIN_ID": "chain_id",
        "LINKGENESIS_UTC_GENESIS_TIME": "utc_genesis_time",
        "LINKGENESIS_PRIV_VALIDATOR_FILE": "priv_validator_file",
        "LINKGENESIS_KEYSTORE_DIR": "keystore_dir",
        "LINKGENESIS_ON_LINE": "on_line",
        "LINKGENESIS_LOG_LEVEL": "log_level",
    }

    # Get values from environment
    for env_var, field_name in env_mappings.items():
        if env_var in os.environ:
            value = os.environ[env_var]

            # Handle type conversions
            if field_name in ["home", "genesis_file", "priv_validator_file", "keystore_dir"]:
                value = Path(value).expanduser()
            elif field_name in ["utc_genesis_time", "on_line"]:
                value = value.strip().lower() in ("1", "true", "yes", "on")

            env_settings[field_name] = value

    # Create config with environment settings
    return GenesisConfig(**env_settings)
