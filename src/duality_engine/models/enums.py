"""Enumeration types for the Duality dice resolution engine.

This module defines the closed outcome set of the Duality mechanic and
the enums describing how a roll's seed was obtained.
"""

from __future__ import annotations

from enum import StrEnum


class Outcome(StrEnum):
    """Classified result of a Duality roll.

    Declaration order is the canonical order used in rules metadata and
    probability tables.
    """

    ROLL_WITH_HOPE = "ROLL_WITH_HOPE"
    ROLL_WITH_FEAR = "ROLL_WITH_FEAR"
    SUCCESS_WITH_HOPE = "SUCCESS_WITH_HOPE"
    SUCCESS_WITH_FEAR = "SUCCESS_WITH_FEAR"
    FAILURE_WITH_HOPE = "FAILURE_WITH_HOPE"
    FAILURE_WITH_FEAR = "FAILURE_WITH_FEAR"
    CRITICAL_SUCCESS = "CRITICAL_SUCCESS"

    @property
    def is_success(self) -> bool:
        """Whether the outcome counts as a success against a difficulty."""
        return self in (
            Outcome.CRITICAL_SUCCESS,
            Outcome.SUCCESS_WITH_HOPE,
            Outcome.SUCCESS_WITH_FEAR,
        )

    @property
    def is_failure(self) -> bool:
        """Whether the outcome counts as a failure against a difficulty."""
        return self in (Outcome.FAILURE_WITH_HOPE, Outcome.FAILURE_WITH_FEAR)

    @property
    def with_hope(self) -> bool:
        """Whether the Hope die led the roll."""
        return self in (
            Outcome.ROLL_WITH_HOPE,
            Outcome.SUCCESS_WITH_HOPE,
            Outcome.FAILURE_WITH_HOPE,
        )

    @property
    def with_fear(self) -> bool:
        """Whether the Fear die led the roll."""
        return self in (
            Outcome.ROLL_WITH_FEAR,
            Outcome.SUCCESS_WITH_FEAR,
            Outcome.FAILURE_WITH_FEAR,
        )


class RollMode(StrEnum):
    """How the caller wants the seed for a roll chosen."""

    UNSPECIFIED = "UNSPECIFIED"
    RANDOM = "RANDOM"
    REPLAY = "REPLAY"


class SeedSource(StrEnum):
    """Where the seed used for a roll came from."""

    CLIENT_SUPPLIED = "CLIENT_SUPPLIED"
    SERVER_GENERATED = "SERVER_GENERATED"


__all__ = [
    "Outcome",
    "RollMode",
    "SeedSource",
]
