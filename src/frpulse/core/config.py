"""
FRPulse Configuration using Pydantic Settings.

Provides strongly typed configuration with environment variable support,
validation, and sensible defaults.

Environment variables use FRPULSE_ prefix:
- FRPULSE_HOME (root directory, see ``get_project_root``)
- FRPULSE_PATHS_CONFIG_DIR (artifact directory under the root)
- FRPULSE_SERVICE_RESTART_AFTER_CHANGE, FRPULSE_SERVICE_SYSTEMCTL
- FRPULSE_LOG_LEVEL, FRPULSE_LOG_FORMAT, FRPULSE_LOG_FILE
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SETTINGS_FILE = "frpulse.yaml"


def get_project_root() -> Path:
    """Get the project root directory."""
    if env_home := os.getenv("FRPULSE_HOME"):
        return Path(env_home)

    # Default to current working directory
    return Path.cwd()


class PathSettings(BaseSettings):
    """Where artifacts are kept."""

    model_config = SettingsConfigDict(
        env_prefix="FRPULSE_PATHS_",
        extra="ignore",
    )

    config_dir: str = Field(
        default="frpulse",
        description="Artifact directory (relative to project root)"
    )
    client_log_dir: str = Field(
        default="/var/log",
        description="Directory the tunnel client writes its log file to"
    )


class ServiceSettings(BaseSettings):
    """Process supervisor settings."""

    model_config = SettingsConfigDict(
        env_prefix="FRPULSE_SERVICE_",
        extra="ignore",
    )

    systemctl: str = Field(
        default="systemctl",
        description="systemctl executable"
    )
    journalctl: str = Field(
        default="journalctl",
        description="journalctl executable"
    )
    restart_after_change: bool = Field(
        default=True,
        description="Restart the client unit after every proxy change"
    )
    timeout: int = Field(
        default=30,
        ge=1,
        description="Seconds to wait for a supervisor command"
    )


class LogSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="FRPULSE_LOG_",
        extra="ignore",
    )

    level: str = Field(
        default="WARNING",
        description="Log level"
    )
    format: str = Field(
        default="console",
        description="Log format (json, console)"
    )
    file: Optional[str] = Field(
        default=None,
        description="Log file path"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator('format')
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ("json", "console"):
            raise ValueError(f"Invalid log format: {v}. Must be 'json' or 'console'")
        return v


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from:
    1. Environment variables (FRPULSE_* prefix)
    2. YAML config file (<root>/frpulse.yaml)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="FRPULSE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    paths: PathSettings = Field(default_factory=PathSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    @classmethod
    def load_from_yaml(cls, config_file: Path) -> "Settings":
        """Load settings from YAML file with environment overrides."""
        data = {}

        if config_file.exists():
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

        settings_dict = {}

        if 'paths' in data:
            settings_dict['paths'] = PathSettings(**data['paths'])
        if 'service' in data:
            settings_dict['service'] = ServiceSettings(**data['service'])
        if 'log' in data:
            settings_dict['log'] = LogSettings(**data['log'])

        return cls(**settings_dict)

    def resolve_path(self, relative_path: str) -> Path:
        """Resolve a relative path against the project root."""
        path = Path(relative_path)
        if path.is_absolute():
            return path
        return get_project_root() / path

    def get_config_dir(self) -> Path:
        """Get the absolute path to the artifact directory."""
        return self.resolve_path(self.paths.config_dir)

    def save_to_yaml(self, config_file: Path) -> None:
        """Save settings to YAML file."""
        config_file.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'paths': {
                'config_dir': self.paths.config_dir,
                'client_log_dir': self.paths.client_log_dir,
            },
            'service': {
                'systemctl': self.service.systemctl,
                'journalctl': self.service.journalctl,
                'restart_after_change': self.service.restart_after_change,
                'timeout': self.service.timeout,
            },
            'log': {
                'level': self.log.level,
                'format': self.log.format,
                'file': self.log.file,
            },
        }

        with open(config_file, 'w') as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached singleton).

    First attempts to load from <root>/frpulse.yaml, then applies
    environment variable overrides.
    """
    config_file = get_project_root() / SETTINGS_FILE

    if config_file.exists():
        return Settings.load_from_yaml(config_file)

    return Settings()
