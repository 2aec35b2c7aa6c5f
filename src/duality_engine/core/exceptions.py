"""Exception hierarchy for the Duality dice resolution engine.

Every error raised by the engine inherits from DualityEngineError, so a
host service can catch the whole family at its boundary while still
reading the structured context each error carries in ``details``.

Errors are split into two families. Validation errors describe caller
input that can be corrected and are safe to surface verbatim. Everything
else (configuration faults, failing seed generators, explain-step
encoding bugs) is a server-side fault. The ``client_error`` flag on each
class lets a transport pick a status code without enumerating classes.

Example:
    >>> from duality_engine.core.exceptions import InvalidDualityDieError
    >>> raise InvalidDualityDieError("hope die out of range", die="hope", value=13)
"""

from __future__ import annotations

from typing import Any, ClassVar


class DualityEngineError(Exception):
    """Base exception for all Duality engine errors.

    Attributes:
        message: Human-readable error description.
        details: Dictionary containing additional error context.
        client_error: True when the caller can fix the problem by changing
            its input.
    """

    client_error: ClassVar[bool] = False

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Validation Exceptions
# =============================================================================


class ValidationError(DualityEngineError):
    """Raised when caller input violates an engine rule.

    Validation errors are never retried internally and are always safe to
    return to the end caller.
    """

    client_error: ClassVar[bool] = True

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


class MissingDiceError(ValidationError):
    """Raised when a dice roll request contains no dice specifications."""


class InvalidDiceSpecError(ValidationError):
    """Raised when a die specification has non-positive sides or count.

    Also raised when dice notation cannot be turned into specifications.
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        sides: int | None = None,
        count: int | None = None,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice spec error with the offending spec.

        Args:
            message: Human-readable error description.
            index: Position of the spec within the request.
            sides: The spec's number of sides.
            count: The spec's number of dice.
            expression: Dice notation that failed to parse.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if index is not None:
            combined_details["index"] = index
        if sides is not None:
            combined_details["sides"] = sides
        if count is not None:
            combined_details["count"] = count
        if expression:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class InvalidDifficultyError(ValidationError):
    """Raised when a difficulty falls below the accepted lower bound."""

    def __init__(
        self,
        message: str,
        *,
        difficulty: int | None = None,
        minimum: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize difficulty error.

        Args:
            message: Human-readable error description.
            difficulty: The rejected difficulty.
            minimum: The smallest accepted difficulty.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if difficulty is not None:
            combined_details["difficulty"] = difficulty
        if minimum is not None:
            combined_details["minimum"] = minimum
        super().__init__(message, details=combined_details)


class InvalidDualityDieError(ValidationError):
    """Raised when a Hope or Fear die value is outside 1-12."""

    def __init__(
        self,
        message: str,
        *,
        die: str | None = None,
        value: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize duality die error.

        Args:
            message: Human-readable error description.
            die: Which die failed ('hope' or 'fear').
            value: The rejected die value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if die:
            combined_details["die"] = die
        if value is not None:
            combined_details["value"] = value
        super().__init__(message, details=combined_details)


class SeedOutOfRangeError(ValidationError):
    """Raised when a replay seed is missing or not a signed 64-bit integer."""

    def __init__(
        self,
        message: str,
        *,
        seed: int | None = None,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize seed range error.

        Args:
            message: Human-readable error description.
            seed: The rejected seed, if one was supplied.
            field_name: Name of the field holding the seed.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if seed is not None:
            combined_details["seed"] = seed
        super().__init__(message, field_name=field_name, details=combined_details)


class UnknownRngAlgorithmError(ValidationError):
    """Raised when a roll names an RNG algorithm that is not registered."""

    def __init__(
        self,
        message: str,
        *,
        algorithm_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize unknown algorithm error.

        Args:
            message: Human-readable error description.
            algorithm_id: The unrecognised algorithm identifier.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if algorithm_id:
            combined_details["algorithm_id"] = algorithm_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Internal Exceptions
# =============================================================================


class ConfigurationError(DualityEngineError):
    """Raised when the host service wired or configured the engine incorrectly."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class SeedGeneratorUnavailableError(ConfigurationError):
    """Raised when a fresh seed is needed but no seed generator was injected."""


class SeedGenerationError(DualityEngineError):
    """Raised when the injected seed generator fails or returns a bad seed."""


class StepEncodingError(DualityEngineError):
    """Raised when an explain step carries a value of an unsupported kind.

    This indicates a bug in step construction rather than bad input.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        value_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize step encoding error.

        Args:
            message: Human-readable error description.
            path: Dotted path of the offending value inside the step data.
            value_type: Python type name of the offending value.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path:
            combined_details["path"] = path
        if value_type:
            combined_details["value_type"] = value_type
        super().__init__(message, details=combined_details)


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
]
