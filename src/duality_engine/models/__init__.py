"""Enumerations shared across the Duality engine."""

from __future__ import annotations

from duality_engine.models.enums import Outcome, RollMode, SeedSource


__all__ = [
    "Outcome",
    "RollMode",
    "SeedSource",
]
