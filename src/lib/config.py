"""Configuration management for the application.

Loads environment variables and provides validated Config dataclass.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from src.lib.constants import (
    DEFAULT_PROXY_HOST,
    DEFAULT_PROXY_PORT,
    DEVELOPMENT_ENV,
    DIAGNOSTICS_DIR,
    REQUEST_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    # Figma
    figma_api_key: str = ""

    # Forward proxy (empty host = direct connection)
    proxy_host: str = DEFAULT_PROXY_HOST
    proxy_port: int = DEFAULT_PROXY_PORT

    # False relaxes certificate checks on the tunneled leg so a
    # TLS-intercepting corporate proxy can re-sign traffic. This is a
    # security trade-off and must be opted into explicitly.
    proxy_tls_verify: bool = True

    # Network
    request_timeout_seconds: float = REQUEST_TIMEOUT_SECONDS

    # Diagnostics
    app_env: str = "production"
    diagnostics_dir: str = DIAGNOSTICS_DIR

    # Logging
    log_level: str = "INFO"

    @property
    def dev_mode(self) -> bool:
        """True when raw/simplified snapshots should be written."""
        return self.app_env == DEVELOPMENT_ENV

    @property
    def proxy_url(self) -> str | None:
        """Proxy URL for httpx, or None for a direct connection."""
        if not self.proxy_host:
            return None
        return f"http://{self.proxy_host}:{self.proxy_port}"

    def validate(self, require_api_key: bool = True) -> None:
        """Validate configuration.

        Args:
            require_api_key: Whether a missing FIGMA_API_KEY is an error

        Raises:
            ValueError: If configuration is invalid
        """
        if require_api_key and not self.figma_api_key:
            raise ValueError("FIGMA_API_KEY is required")

        if self.proxy_host and not 0 < self.proxy_port < 65536:
            raise ValueError("proxy_port must be between 1 and 65535")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(sorted(valid_levels))}")

        if self.request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be positive")

    @classmethod
    def from_env(cls, env_file: str | None = None, require_api_key: bool = True) -> "Config":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file
            require_api_key: Whether a missing FIGMA_API_KEY is an error

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        if env_file:
            load_dotenv(env_file)
        else:
            for path in ["config/.env", ".env"]:
                if Path(path).exists():
                    load_dotenv(path)
                    break

        try:
            proxy_port = int(os.getenv("PROXY_PORT", str(DEFAULT_PROXY_PORT)))
            timeout = float(os.getenv("REQUEST_TIMEOUT_SECONDS", str(REQUEST_TIMEOUT_SECONDS)))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting: {e}") from e

        config = cls(
            figma_api_key=os.getenv("FIGMA_API_KEY", ""),
            proxy_host=os.getenv("PROXY_HOST", DEFAULT_PROXY_HOST),
            proxy_port=proxy_port,
            proxy_tls_verify=os.getenv("PROXY_TLS_VERIFY", "true").lower() != "false",
            request_timeout_seconds=timeout,
            app_env=os.getenv("APP_ENV", "production"),
            diagnostics_dir=os.getenv("DIAGNOSTICS_DIR", DIAGNOSTICS_DIR),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

        config.validate(require_api_key=require_api_key)
        return config


# Global config instance (loaded on first use)
_config: Config | None = None


def get_config() -> Config:
    """Get global config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set global config instance (for testing).

    Args:
        config: Config instance, or None to force a reload
    """
    global _config
    _config = config
