"""Exact outcome distribution over every Hope/Fear pair.

The calculator walks all 144 ordered ``(hope, fear)`` pairs and classifies
each with :func:`~duality_engine.duality.outcome.evaluate_outcome`, so the
table can never disagree with an actual evaluation.
"""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict

from duality_engine.core.constants import DUALITY_DIE_MIN, DUALITY_DIE_SIDES
from duality_engine.duality.outcome import OutcomeRequest, evaluate_outcome, validate_difficulty
from duality_engine.models.enums import Outcome


class ProbabilityRequest(BaseModel):
    """Modifier and mandatory difficulty for a distribution."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    modifier: int = 0
    difficulty: int


class OutcomeCount(BaseModel):
    """Number of pairs producing one outcome."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outcome: Outcome
    count: int


class ProbabilityResult(BaseModel):
    """Outcome counts over the full sample space.

    ``outcome_counts`` lists only outcomes that occur, in Outcome
    declaration order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    total_outcomes: int
    crit_count: int
    success_count: int
    failure_count: int
    outcome_counts: tuple[OutcomeCount, ...]

    def probability(self, outcome: Outcome) -> float:
        """Fraction of the sample space producing ``outcome``."""
        for entry in self.outcome_counts:
            if entry.outcome == outcome:
                return entry.count / self.total_outcomes
        return 0.0


def compute_probability(request: ProbabilityRequest) -> ProbabilityResult:
    """Tabulate outcomes for every Hope/Fear pair.

    Args:
        request: Modifier and difficulty to evaluate each pair with.

    Returns:
        Counts per outcome plus crit, success and failure totals.

    Raises:
        InvalidDifficultyError: If the difficulty is below the bound.
    """
    validate_difficulty(request.difficulty)

    faces = range(DUALITY_DIE_MIN, DUALITY_DIE_SIDES + 1)
    tally: Counter[Outcome] = Counter(
        evaluate_outcome(
            OutcomeRequest(
                hope=hope,
                fear=fear,
                modifier=request.modifier,
                difficulty=request.difficulty,
            )
        ).outcome
        for hope in faces
        for fear in faces
    )

    return ProbabilityResult(
        total_outcomes=sum(tally.values()),
        crit_count=tally[Outcome.CRITICAL_SUCCESS],
        success_count=sum(count for outcome, count in tally.items() if outcome.is_success),
        failure_count=sum(count for outcome, count in tally.items() if outcome.is_failure),
        outcome_counts=tuple(
            OutcomeCount(outcome=outcome, count=tally[outcome]) for outcome in Outcome if tally[outcome]
        ),
    )


__all__ = [
    "ProbabilityRequest",
    "OutcomeCount",
    "ProbabilityResult",
    "compute_probability",
]
