"""Configuration management for the Duality dice resolution engine.

Settings are loaded with pydantic-settings from environment variables and
an optional ``.env`` file. The engine itself is pure; configuration only
chooses defaults for the host-facing service layer (logging output and
the RNG algorithm used for fresh rolls).

Example:
    >>> from duality_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.dice.rng_algorithm
    'mt19937-v1'

Environment Variables:
    DUALITY_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DUALITY_ENGINE_JSON_LOGS: Emit JSON logs instead of console output
    DUALITY_ENGINE_DICE_RNG_ALGORITHM: RNG algorithm ID used for new rolls
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from duality_engine.core.exceptions import ConfigurationError
from duality_engine.core.logging import configure_logging
from duality_engine.engine.rng import DEFAULT_RNG_ALGORITHM, available_algorithms


class DiceSettings(BaseSettings):
    """Configuration for dice rolling.

    Attributes:
        rng_algorithm: Algorithm ID used when a roll does not name one.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUALITY_ENGINE_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    rng_algorithm: str = Field(
        default=DEFAULT_RNG_ALGORITHM,
        description="RNG algorithm ID for new rolls",
    )

    @field_validator("rng_algorithm", mode="after")
    @classmethod
    def validate_rng_algorithm(cls, value: str) -> str:
        """Ensure the configured algorithm is registered.

        Args:
            value: The configured algorithm ID.

        Returns:
            The validated algorithm ID.

        Raises:
            ConfigurationError: If no algorithm is registered under the ID.
        """
        if value not in available_algorithms():
            raise ConfigurationError(
                f"Unknown RNG algorithm {value!r}",
                config_key="rng_algorithm",
                details={"available": list(available_algorithms())},
            )
        return value


class Settings(BaseSettings):
    """Main settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Logging level.
        json_logs: Emit JSON logs.
        dice: Dice rolling settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUALITY_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Duality Engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON logs",
    )

    dice: DiceSettings = Field(default_factory=DiceSettings)

    @property
    def is_production(self) -> bool:
        """True if not in debug mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


def configure_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from the log level and JSON flag in settings.

    Args:
        settings: Settings to apply; the cached settings when omitted.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_format=settings.json_logs)


__all__ = [
    "DiceSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging_from_settings",
]
