"""
Configuration management using pydantic-settings.
Loads from config.yaml, .env, and environment variables.

Output format is deliberately not configurable here: it comes only from
command-line flags and terminal detection.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file at module import
load_dotenv()

logger = logging.getLogger(__name__)


class EagleSettings(BaseSettings):
    """Eagle local API settings."""

    model_config = SettingsConfigDict(
        env_prefix="EAGLE_",
        extra="ignore",
    )

    host: str = Field(default="localhost", description="Host the Eagle API listens on")
    port: int = Field(default=41595, description="Eagle API port")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    token: str | None = Field(default=None, description="Optional API token")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    eagle: EagleSettings = Field(default_factory=EagleSettings)

    verbose: bool = Field(default=False)
    debug: bool = Field(default=False)
    log_file: Path | None = Field(default=None, description="Also write logs to this file")

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Settings":
        """Load settings from config.yaml and environment."""
        config_data: dict[str, Any] = {}

        if config_path is None:
            config_path = Path("config.yaml")

        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                yaml_content: Any = yaml.safe_load(f)
                yaml_config: dict[str, Any] = yaml_content or {}

            if "output" in yaml_config:
                logger.warning("Ignoring 'output' in %s; output format is set with --output or --json", config_path)
            if "eagle" in yaml_config:
                config_data["eagle"] = EagleSettings(**(yaml_config["eagle"] or {}))
            for key in ("verbose", "debug", "log_file"):
                if key in yaml_config:
                    config_data[key] = yaml_config[key]

        # Load Eagle settings from environment (yaml wins when present)
        if "eagle" not in config_data:
            config_data["eagle"] = EagleSettings()

        return cls(**config_data)


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload settings from config."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings
