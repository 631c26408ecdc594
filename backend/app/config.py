"""
Greeter Backend - Application Configuration
=============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and exposes a cached `Settings` instance.
Who:   The application factory (main.py) and the process entrypoint (server.py).
When:  Loaded once per process; command-line overrides build a fresh instance.

Environment variables:
    SERVER_HOST   Interface to bind (default 0.0.0.0)
    SERVER_PORT   TCP port to listen on (default 8080)
    LOG_LEVEL     DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    ACCESS_LOG    Log one line per request (default true)
"""

from functools import lru_cache
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from app.exceptions import ConfigurationError


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for local development.
    """

    # ── Server ────────────────────────────────────────────────────────────
    server_host: str = Field(default="0.0.0.0", min_length=1)
    server_port: int = Field(default=8080, ge=1024, le=65535)

    # ── Logging ───────────────────────────────────────────────────────────
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    # What: Emit one log line per request via RequestLoggingMiddleware
    access_log: bool = Field(default=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # SERVER_PORT and server_port both work
        "extra": "ignore",
    }

    @property
    def base_url(self) -> str:
        host = f"[{self.server_host}]" if ":" in self.server_host else self.server_host
        return f"http://{host}:{self.server_port}"


def load_settings(**overrides: Any) -> Settings:
    """
    Build a fresh Settings instance with explicit overrides.

    What:    Overrides (e.g. from command-line flags) win over the environment.
             Overrides whose value is None are ignored, so unset flags fall back
             to the environment and then to the field defaults.
    Raises:  ConfigurationError listing every invalid field.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError(
            "Configuration validation failed:\n" + "\n".join(f"  - {p}" for p in problems),
            context={"fields": [err["loc"] for err in e.errors()]},
        ) from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    return load_settings()
