"""
Configuration for the NBAI MCP server.

Settings come from the environment, optionally seeded from a .env file.
"""

import logging
import os
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_BASE_URL = "https://api.nextbillion.io"


class ConfigError(ValueError):
    """Raised when the server cannot be configured from the environment"""


class Settings(BaseModel):
    """Runtime settings for the NextBillion.ai client"""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(..., description="NextBillion.ai API key")
    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL without trailing slash")
    http_timeout: float | None = Field(None, description="HTTP timeout in seconds, None for no timeout")
    log_level: str = Field("INFO", description="Log level name")


def load_settings() -> Settings:
    """
    Load settings from the environment.

    Reads NBAI_API_KEY (required), NBAI_BASE_URL, NBAI_HTTP_TIMEOUT and
    NBAI_LOG_LEVEL.

    Raises:
        ConfigError: If the API key is missing or a value cannot be parsed
    """
    load_dotenv()

    api_key = os.getenv("NBAI_API_KEY", "").strip()
    if not api_key:
        raise ConfigError("NBAI_API_KEY environment variable is not set")

    timeout_raw = os.getenv("NBAI_HTTP_TIMEOUT", "").strip()
    try:
        http_timeout = float(timeout_raw) if timeout_raw else None
    except ValueError:
        raise ConfigError(f"NBAI_HTTP_TIMEOUT must be a number of seconds, got {timeout_raw!r}")

    log_level = os.getenv("NBAI_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"NBAI_LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Settings(
        api_key=api_key,
        base_url=os.getenv("NBAI_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/") or DEFAULT_BASE_URL,
        http_timeout=http_timeout,
        log_level=log_level,
    )
