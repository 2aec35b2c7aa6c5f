"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestDualityEngineError:
    """Tests for the base DualityEngineError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = DualityEngineError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = DualityEngineError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(DualityEngineError("Test", details={"x": 1}))
        assert "DualityEngineError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestValidationErrors:
    """Tests for caller-correctable errors."""

    @pytest.mark.parametrize(
        "exc_type",
        [
            MissingDiceError,
            InvalidDiceSpecError,
            InvalidDifficultyError,
            InvalidDualityDieError,
            SeedOutOfRangeError,
            UnknownRngAlgorithmError,
        ],
    )
    def test_client_errors(self, exc_type: type[ValidationError]) -> None:
        """Every validation error is flagged as a client error."""
        exc = exc_type("bad input")
        assert isinstance(exc, ValidationError)
        assert isinstance(exc, DualityEngineError)
        assert exc.client_error is True

    def test_dice_spec_context(self) -> None:
        """Test InvalidDiceSpecError records the offending spec."""
        exc = InvalidDiceSpecError("bad spec", index=2, sides=0, count=1)
        assert exc.details == {"index": 2, "sides": 0, "count": 1}

    def test_duality_die_context(self) -> None:
        """Test InvalidDualityDieError records die and value."""
        exc = InvalidDualityDieError("bad die", die="fear", value=13)
        assert exc.details["die"] == "fear"
        assert exc.details["value"] == 13

    def test_difficulty_context(self) -> None:
        """Test InvalidDifficultyError records the bound."""
        exc = InvalidDifficultyError("too low", difficulty=-1, minimum=0)
        assert exc.details == {"difficulty": -1, "minimum": 0}

    def test_seed_zero_is_recorded(self) -> None:
        """A zero seed is still reported in details."""
        exc = SeedOutOfRangeError("bad seed", seed=0)
        assert exc.details["seed"] == 0

    def test_missing_seed_names_field(self) -> None:
        """A missing replay seed is reported by field name."""
        exc = SeedOutOfRangeError("no seed", field_name="seed")
        assert exc.details == {"field_name": "seed"}
        assert exc.client_error is True


class TestServerErrors:
    """Tests for configuration and internal errors."""

    @pytest.mark.parametrize(
        "exc_type",
        [ConfigurationError, SeedGeneratorUnavailableError, SeedGenerationError, StepEncodingError],
    )
    def test_not_client_errors(self, exc_type: type[DualityEngineError]) -> None:
        """Server-side faults are not flagged as client errors."""
        assert exc_type("fault").client_error is False

    def test_unavailable_generator_is_configuration_error(self) -> None:
        """Test SeedGeneratorUnavailableError inheritance."""
        exc = SeedGeneratorUnavailableError("missing", config_key="seed_generator")
        assert isinstance(exc, ConfigurationError)
        assert exc.details["config_key"] == "seed_generator"

    def test_step_encoding_context(self) -> None:
        """Test StepEncodingError records path and type."""
        exc = StepEncodingError("bad value", path="data.when", value_type="datetime")
        assert exc.details == {"path": "data.when", "value_type": "datetime"}
