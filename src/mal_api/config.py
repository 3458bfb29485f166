"""Configuration management using Pydantic models."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .constants import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from .credentials import Credentials
from .exceptions import ConfigError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Environment variables that override values from the config file
ENV_OVERRIDES = {
    "MAL_USERNAME": "username",
    "MAL_PASSWORD": "password",
    "MAL_API_KEY": "api_key",
}


class ClientConfig(BaseModel):
    """HTTP client settings."""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT_SECONDS, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    max_retries: int = Field(default=0, ge=0)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.rstrip("/")


class MALConfig(BaseModel):
    """MyAnimeList account configuration."""
    username: Optional[str] = None
    password: Optional[str] = None
    api_key: Optional[str] = None


class Config(BaseModel):
    """Root configuration model."""
    mal: MALConfig = Field(default_factory=MALConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Accept log levels case-insensitively."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def credentials(self) -> Credentials:
        """Build account credentials from the ``mal`` section."""
        return Credentials(
            self.mal.username or "",
            password=self.mal.password,
            api_key=self.mal.api_key,
        )


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from a YAML file, then apply environment overrides.

    A missing file yields the defaults. Invalid YAML or invalid values raise
    :class:`ConfigError`.
    """
    raw_config = {}
    if path is not None:
        config_path = Path(path)
        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    raw_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Failed to parse {config_path}: {e}") from e
            if not isinstance(raw_config, dict):
                raise ConfigError(f"Expected a mapping at the top of {config_path}")
            logger.info(f"Loaded configuration from {config_path}")
        else:
            logger.debug(f"Config file {config_path} not found, using defaults")

    mal_section = dict(raw_config.get("mal") or raw_config.get("myanimelist") or {})
    for var_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(var_name)
        if value:
            mal_section[key] = value
    raw_config["mal"] = mal_section
    raw_config.pop("myanimelist", None)

    try:
        return Config(**raw_config)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def setup_logging(level: str = "INFO"):
    """Configure logging for an application using the library."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )
