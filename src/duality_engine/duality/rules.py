"""Ruleset metadata for Duality roll interpretation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from duality_engine.core.constants import MIN_DIFFICULTY
from duality_engine.models.enums import Outcome


# Bump whenever classification rules change so stored explanations stay attributable.
RULES_VERSION = "1.0.0"


class RulesMetadata(BaseModel):
    """Human- and machine-readable description of the ruleset in effect."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    system: str
    module: str
    rules_version: str
    dice_model: str
    total_formula: str
    crit_rule: str
    difficulty_rule: str
    outcomes: tuple[Outcome, ...]


def rules_metadata() -> RulesMetadata:
    """Describe the Duality ruleset edition used for classification."""
    return RulesMetadata(
        system="Daggerheart",
        module="Duality",
        rules_version=RULES_VERSION,
        dice_model="1d12 Hope + 1d12 Fear",
        total_formula="hope + fear + modifier",
        crit_rule="hope == fear is a critical success, regardless of difficulty",
        difficulty_rule=(
            f"optional; total >= difficulty succeeds; difficulty must be >= {MIN_DIFFICULTY}"
        ),
        outcomes=tuple(Outcome),
    )


__all__ = [
    "RULES_VERSION",
    "RulesMetadata",
    "rules_metadata",
]
