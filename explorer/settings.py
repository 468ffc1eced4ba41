"""Settings configuration for the in-memory file explorer."""

import os
from dataclasses import dataclass
from typing import Optional


def _optional_positive_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got: {value}")
    return value


@dataclass
class ExplorerSettings:
    """Tree and search settings."""
    root_name: str = "root"
    max_name_length: Optional[int] = None  # None = unbounded
    search_strategy: str = "dfs"  # dfs, bfs

    @classmethod
    def from_env(cls) -> "ExplorerSettings":
        """Load explorer settings from environment variables."""
        return cls(
            root_name=os.getenv("EXPLORER_ROOT_NAME", "root"),
            max_name_length=_optional_positive_int("EXPLORER_MAX_NAME_LENGTH"),
            search_strategy=os.getenv("EXPLORER_SEARCH_STRATEGY", "dfs").strip().lower(),
        )


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        """Load logging settings from environment variables."""
        return cls(level=os.getenv("EXPLORER_LOG_LEVEL", "INFO").upper())


@dataclass
class ApiSettings:
    """HTTP API settings."""
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load API settings from environment variables."""
        port_str = os.getenv("EXPLORER_API_PORT", "8000")
        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"EXPLORER_API_PORT must be an integer, got: {port_str}")
        return cls(
            host=os.getenv("EXPLORER_API_HOST", "127.0.0.1"),
            port=port,
        )


@dataclass
class Settings:
    """Main settings class combining all configuration."""
    explorer: ExplorerSettings
    logging: LoggingSettings
    api: ApiSettings

    @classmethod
    def from_env(cls) -> "Settings":
        """Load all settings from environment variables."""
        return cls(
            explorer=ExplorerSettings.from_env(),
            logging=LoggingSettings.from_env(),
            api=ApiSettings.from_env(),
        )


# Global settings instance
settings = Settings.from_env()
