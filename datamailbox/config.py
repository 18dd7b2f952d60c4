"""
Configuration management for the DataMailbox client.
Handles loading and validation of settings from YAML files.
"""

import yaml
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://data.talk2m.com/"
DEFAULT_USER_AGENT = "datamailbox-python/0.1"
REDACTED = '***REDACTED***'


class APISettings(BaseModel):
    """Talk2M account credentials and endpoint settings."""
    account_id: str = Field(description="Talk2M account name (t2maccount)")
    username: str = Field(description="Talk2M username (t2musername)")
    password: str = Field(description="Talk2M password (t2mpassword)")
    developer_id: str = Field(description="Talk2M developer id (t2mdevid)")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Base URL of the DataMailbox service")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent header sent with every request")

    def redacted(self) -> dict:
        """Settings as a dict with the password masked, safe to write out."""
        return {**self.model_dump(), 'password': REDACTED}


class LoggingSettings(BaseModel):
    """Logging configuration settings."""
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    file: Optional[str] = Field(default=None)

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v_upper


class DataMailboxConfig(BaseModel):
    """Complete client configuration."""
    api: APISettings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> 'DataMailboxConfig':
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            DataMailboxConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

        if config_data is None:
            raise ValueError("Empty configuration file")

        try:
            return cls(**config_data)
        except Exception as e:
            raise ValueError(f"Error loading configuration: {e}")

    def save_yaml(self, config_path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path where to save configuration
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config_dict = {'api': self.api.redacted(), 'logging': self.logging.model_dump()}

        with open(config_path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False)


def load_config(config_path: Optional[str | Path] = None) -> DataMailboxConfig:
    """
    Load configuration from file.

    Args:
        config_path: Optional path to config file

    Returns:
        DataMailboxConfig instance
    """
    if config_path is None:
        possible_paths = [
            Path('datamailbox_config.yaml'),
            Path('config/datamailbox_config.yaml'),
            Path('../config/datamailbox_config.yaml'),
        ]

        for path in possible_paths:
            if path.exists():
                return DataMailboxConfig.from_yaml(path)

        # Credentials have no sensible default
        raise FileNotFoundError(
            "No configuration file found. Please create datamailbox_config.yaml with Talk2M credentials."
        )

    return DataMailboxConfig.from_yaml(config_path)
