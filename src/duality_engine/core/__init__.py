"""Core module providing configuration, logging, constants and exceptions.

Exports:
    Exceptions:
        DualityEngineError: Base exception for all engine errors.
        ValidationError: Caller-correctable input errors.
        ConfigurationError: Host wiring and configuration faults.

    Configuration:
        Settings: Main settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.
        configure_logging_from_settings: Apply logging settings.

    Logging:
        configure_logging: Set up engine logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from duality_engine.core.config import (
    DiceSettings,
    Settings,
    clear_settings_cache,
    configure_logging_from_settings,
    get_settings,
)
from duality_engine.core.exceptions import (
    ConfigurationError,
    DualityEngineError,
    InvalidDiceSpecError,
    InvalidDifficultyError,
    InvalidDualityDieError,
    MissingDiceError,
    SeedGenerationError,
    SeedGeneratorUnavailableError,
    SeedOutOfRangeError,
    StepEncodingError,
    UnknownRngAlgorithmError,
    ValidationError,
)
from duality_engine.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "DualityEngineError",
    # Validation exceptions
    "ValidationError",
    "MissingDiceError",
    "InvalidDiceSpecError",
    "InvalidDifficultyError",
    "InvalidDualityDieError",
    "SeedOutOfRangeError",
    "UnknownRngAlgorithmError",
    # Configuration & internal exceptions
    "ConfigurationError",
    "SeedGeneratorUnavailableError",
    "SeedGenerationError",
    "StepEncodingError",
    # Configuration
    "Settings",
    "DiceSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging_from_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
