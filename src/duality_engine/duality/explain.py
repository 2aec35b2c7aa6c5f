"""Deterministic explanations of Duality outcomes.

:func:`explain_outcome` evaluates a request through
:func:`~duality_engine.duality.outcome.evaluate_outcome` and then records
an ordered trace of how the result was reached. The trace never
re-derives the classification; it reports what the evaluator decided, so
an explanation and an evaluation of the same request always agree.

Each step's ``data`` is restricted to a closed set of value kinds
(StepValue): str, bool, signed 64-bit int, float, and lists or
string-keyed mappings of those. Values are checked when a step is built,
so a step with an unsupported value fails the whole explanation with
StepEncodingError instead of reaching a transport.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, field_validator

from duality_engine.core.constants import INT64_MAX, INT64_MIN
from duality_engine.core.exceptions import StepEncodingError
from duality_engine.duality.outcome import OutcomeRequest, OutcomeResult, evaluate_outcome
from duality_engine.duality.rules import RULES_VERSION
from duality_engine.models.enums import Outcome


StepValue = Union[str, bool, int, float, list["StepValue"], dict[str, "StepValue"]]

# Stable step codes
STEP_SUM_DICE = "SUM_DICE"
STEP_APPLY_MODIFIER = "APPLY_MODIFIER"
STEP_CHECK_CRIT = "CHECK_CRIT"
STEP_CHECK_DIFFICULTY = "CHECK_DIFFICULTY"
STEP_SELECT_OUTCOME = "SELECT_OUTCOME"


class ExplainStep(BaseModel):
    """One step of an explanation trace.

    ``data`` is checked against the StepValue kinds however the step is
    built; unsupported values raise StepEncodingError.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: str
    message: str
    data: dict[str, Any]

    @field_validator("data", mode="before")
    @classmethod
    def validate_data(cls, value: Any) -> dict[str, StepValue]:
        """Encode step data into the closed StepValue set.

        Raises:
            StepEncodingError: If ``value`` is not a string-keyed mapping of
                StepValue kinds.
        """
        if not isinstance(value, Mapping):
            raise StepEncodingError(
                "Step data must be a mapping",
                path="data",
                value_type=type(value).__name__,
            )
        return encode_step_data(value)


class Intermediates(BaseModel):
    """Values derived while evaluating an outcome."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_total: int
    total: int
    is_crit: bool
    meets_difficulty: bool | None
    hope_gt_fear: bool
    fear_gt_hope: bool


class ExplainResult(OutcomeResult):
    """An OutcomeResult with the ruleset version and evaluation trace."""

    rules_version: str
    intermediates: Intermediates
    steps: tuple[ExplainStep, ...]


def encode_step_value(value: Any, path: str = "data") -> StepValue:
    """Check ``value`` against the StepValue kinds and normalise containers.

    Tuples become lists and mappings become plain dicts.

    Raises:
        StepEncodingError: For None, out-of-range ints, non-string mapping
            keys, or any other type.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool | str | float):
        return value
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise StepEncodingError(
                "Integer does not fit in 64 bits",
                path=path,
                value_type=type(value).__name__,
            )
        return value
    if isinstance(value, Mapping):
        return encode_step_data(value, path)
    if isinstance(value, list | tuple):
        return [encode_step_value(item, f"{path}[{index}]") for index, item in enumerate(value)]
    raise StepEncodingError(
        "Unsupported step value",
        path=path,
        value_type=type(value).__name__,
    )


def encode_step_data(data: Mapping[str, Any], path: str = "data") -> dict[str, StepValue]:
    """Encode a string-keyed record of step values."""
    encoded: dict[str, StepValue] = {}
    for key, item in data.items():
        if not isinstance(key, str):
            raise StepEncodingError(
                "Mapping keys must be strings",
                path=f"{path}.{key!r}",
                value_type=type(key).__name__,
            )
        encoded[key] = encode_step_value(item, f"{path}.{key}")
    return encoded


def make_step(code: str, message: str, **data: Any) -> ExplainStep:
    """Build a step from keyword data."""
    return ExplainStep(code=code, message=message, data=data)


def _outcome_rule(result: OutcomeResult) -> str:
    if result.is_crit:
        return "critical"
    if result.difficulty is None:
        return "no_difficulty"
    return "difficulty_met" if result.meets_difficulty else "difficulty_missed"


def explain_outcome(request: OutcomeRequest) -> ExplainResult:
    """Evaluate a request and explain how its outcome was reached.

    Args:
        request: Dice values, modifier and optional difficulty.

    Returns:
        The evaluated result with ``rules_version``, intermediates and an
        ordered step trace. The difficulty step is present only when a
        difficulty was given.

    Raises:
        InvalidDualityDieError: If either die is outside 1-12.
        InvalidDifficultyError: If the difficulty is below the bound.
        StepEncodingError: If a step carries an unsupported value.
    """
    result = evaluate_outcome(request)
    base_total = result.hope + result.fear

    intermediates = Intermediates(
        base_total=base_total,
        total=result.total,
        is_crit=result.is_crit,
        meets_difficulty=result.meets_difficulty,
        hope_gt_fear=result.hope > result.fear,
        fear_gt_hope=result.fear > result.hope,
    )

    steps = [
        make_step(
            STEP_SUM_DICE,
            f"Hope {result.hope} + Fear {result.fear} = {base_total}",
            hope=result.hope,
            fear=result.fear,
            base_total=base_total,
        ),
        make_step(
            STEP_APPLY_MODIFIER,
            f"{base_total} + modifier {result.modifier} = {result.total}",
            base_total=base_total,
            modifier=result.modifier,
            total=result.total,
        ),
        make_step(
            STEP_CHECK_CRIT,
            "Hope equals Fear: critical success" if result.is_crit else "Hope and Fear differ: no critical",
            hope=result.hope,
            fear=result.fear,
            is_crit=result.is_crit,
        ),
    ]
    if result.difficulty is not None:
        comparison = ">=" if result.meets_difficulty else "<"
        steps.append(
            make_step(
                STEP_CHECK_DIFFICULTY,
                f"Total {result.total} {comparison} difficulty {result.difficulty}",
                total=result.total,
                difficulty=result.difficulty,
                meets_difficulty=bool(result.meets_difficulty),
            )
        )
    steps.append(
        make_step(
            STEP_SELECT_OUTCOME,
            f"Outcome: {_describe(result.outcome)}",
            outcome=result.outcome.value,
            rule=_outcome_rule(result),
            hope_gt_fear=intermediates.hope_gt_fear,
            fear_gt_hope=intermediates.fear_gt_hope,
        )
    )

    return ExplainResult(
        **result.model_dump(),
        rules_version=RULES_VERSION,
        intermediates=intermediates,
        steps=tuple(steps),
    )


def _describe(outcome: Outcome) -> str:
    return outcome.value.replace("_", " ").lower()


__all__ = [
    "StepValue",
    "STEP_SUM_DICE",
    "STEP_APPLY_MODIFIER",
    "STEP_CHECK_CRIT",
    "STEP_CHECK_DIFFICULTY",
    "STEP_SELECT_OUTCOME",
    "ExplainStep",
    "Intermediates",
    "ExplainResult",
    "encode_step_value",
    "encode_step_data",
    "make_step",
    "explain_outcome",
]
