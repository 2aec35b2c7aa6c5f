"""Duality outcome evaluation and action rolls.

A Duality roll sums a Hope d12, a Fear d12 and a modifier, then
classifies the result. The classification order is fixed:

1. Hope equals Fear: CRITICAL_SUCCESS, whatever the difficulty.
2. No difficulty: ROLL_WITH_HOPE or ROLL_WITH_FEAR, whichever die is higher.
3. Difficulty met: SUCCESS_WITH_HOPE or SUCCESS_WITH_FEAR.
4. Difficulty missed: FAILURE_WITH_HOPE or FAILURE_WITH_FEAR.

Because rule 1 takes every tie, rules 2-4 only ever compare unequal dice.

``meets_difficulty`` is computed from the total alone, so a critical roll
can report ``meets_difficulty=False`` while its outcome is
CRITICAL_SUCCESS.
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from duality_engine.core.constants import DUALITY_DIE_MIN, DUALITY_DIE_SIDES, MIN_DIFFICULTY
from duality_engine.core.exceptions import InvalidDifficultyError, InvalidDualityDieError
from duality_engine.core.logging import get_logger
from duality_engine.engine.dice import DiceRollRequest, DieSpec, roll_dice
from duality_engine.engine.rng import DEFAULT_RNG_ALGORITHM
from duality_engine.engine.seed import (
    ResolvedSeed,
    SeedDirective,
    SeedGenerator,
    is_replay_mode,
    resolve_seed,
)
from duality_engine.models.enums import Outcome, RollMode


logger = get_logger(__name__)


class OutcomeRequest(BaseModel):
    """Known Hope and Fear values to classify.

    Attributes:
        hope: Hope die value (1-12).
        fear: Fear die value (1-12).
        modifier: Flat modifier added to the dice.
        difficulty: Optional target number.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hope: int
    fear: int
    modifier: int = 0
    difficulty: int | None = None


class DualityRollRequest(BaseModel):
    """A seeded request to roll and classify Duality dice.

    Attributes:
        modifier: Flat modifier added to the dice.
        difficulty: Optional target number.
        seed: Signed 64-bit seed.
        rng_algorithm: Algorithm ID the dice are drawn with.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    modifier: int = 0
    difficulty: int | None = None
    seed: int
    rng_algorithm: str = DEFAULT_RNG_ALGORITHM


class OutcomeResult(BaseModel):
    """A classified Duality roll.

    Attributes:
        hope: Hope die value.
        fear: Fear die value.
        modifier: Modifier applied.
        difficulty: Target number, if one was given.
        total: ``hope + fear + modifier``.
        is_crit: True exactly when ``hope == fear``.
        meets_difficulty: ``total >= difficulty``; None without a difficulty.
        outcome: The classified outcome.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    hope: int
    fear: int
    modifier: int
    difficulty: int | None
    total: int
    is_crit: bool
    meets_difficulty: bool | None
    outcome: Outcome


class ActionRollResult(BaseModel):
    """An action roll together with the seed it was drawn from."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    result: OutcomeResult
    resolved_seed: ResolvedSeed


def validate_difficulty(difficulty: int | None) -> None:
    """Reject difficulties below MIN_DIFFICULTY.

    Raises:
        InvalidDifficultyError: If ``difficulty`` is below the bound.
    """
    if difficulty is not None and difficulty < MIN_DIFFICULTY:
        raise InvalidDifficultyError(
            f"Difficulty must be at least {MIN_DIFFICULTY}",
            difficulty=difficulty,
            minimum=MIN_DIFFICULTY,
        )


def _validate_die(die: str, value: int) -> None:
    if not DUALITY_DIE_MIN <= value <= DUALITY_DIE_SIDES:
        raise InvalidDualityDieError(
            f"{die.capitalize()} die must be between {DUALITY_DIE_MIN} and {DUALITY_DIE_SIDES}",
            die=die,
            value=value,
        )


def classify_outcome(
    hope: int,
    fear: int,
    difficulty: int | None,
    meets_difficulty: bool | None,
) -> Outcome:
    """Apply the classification rules in priority order."""
    if hope == fear:
        return Outcome.CRITICAL_SUCCESS
    if difficulty is None:
        return Outcome.ROLL_WITH_HOPE if hope > fear else Outcome.ROLL_WITH_FEAR
    if meets_difficulty:
        return Outcome.SUCCESS_WITH_HOPE if hope > fear else Outcome.SUCCESS_WITH_FEAR
    return Outcome.FAILURE_WITH_HOPE if hope > fear else Outcome.FAILURE_WITH_FEAR


def evaluate_outcome(request: OutcomeRequest) -> OutcomeResult:
    """Classify known Hope and Fear values.

    Args:
        request: Dice values, modifier and optional difficulty.

    Returns:
        The totalled and classified result.

    Raises:
        InvalidDualityDieError: If either die is outside 1-12.
        InvalidDifficultyError: If the difficulty is below MIN_DIFFICULTY.
    """
    _validate_die("hope", request.hope)
    _validate_die("fear", request.fear)
    validate_difficulty(request.difficulty)

    total = request.hope + request.fear + request.modifier
    is_crit = request.hope == request.fear
    meets_difficulty = None if request.difficulty is None else total >= request.difficulty

    return OutcomeResult(
        hope=request.hope,
        fear=request.fear,
        modifier=request.modifier,
        difficulty=request.difficulty,
        total=total,
        is_crit=is_crit,
        meets_difficulty=meets_difficulty,
        outcome=classify_outcome(request.hope, request.fear, request.difficulty, meets_difficulty),
    )


def roll_action(request: DualityRollRequest) -> OutcomeResult:
    """Roll Hope then Fear from a seed and classify the result.

    Both dice come from one d12 spec of count two, so Hope is always the
    first draw and Fear the second.

    Raises:
        InvalidDifficultyError: If the difficulty is below MIN_DIFFICULTY.
        SeedOutOfRangeError: If the seed is not a signed 64-bit integer.
        UnknownRngAlgorithmError: If the algorithm is not registered.
    """
    validate_difficulty(request.difficulty)

    dice = roll_dice(
        DiceRollRequest(
            dice=(DieSpec(sides=DUALITY_DIE_SIDES, count=2),),
            seed=request.seed,
            rng_algorithm=request.rng_algorithm,
        )
    )
    hope, fear = dice.rolls[0].results

    result = evaluate_outcome(
        OutcomeRequest(
            hope=hope,
            fear=fear,
            modifier=request.modifier,
            difficulty=request.difficulty,
        )
    )
    logger.debug("Action rolled", hope=hope, fear=fear, outcome=result.outcome)
    return result


def action_roll(
    directive: SeedDirective,
    seed_generator: SeedGenerator | None,
    *,
    modifier: int = 0,
    difficulty: int | None = None,
    is_replay: Callable[[RollMode], bool] = is_replay_mode,
    rng_algorithm: str = DEFAULT_RNG_ALGORITHM,
) -> ActionRollResult:
    """Resolve a seed, roll the Duality dice and classify them.

    The difficulty is validated before any seed is requested.

    Args:
        directive: The caller's seed and roll mode.
        seed_generator: Injected source of fresh seeds.
        modifier: Flat modifier added to the dice.
        difficulty: Optional target number.
        is_replay: Predicate deciding whether a mode means replay.
        rng_algorithm: Algorithm ID the dice are drawn with.

    Returns:
        The classified roll and the seed it used.
    """
    validate_difficulty(difficulty)
    resolved = resolve_seed(directive, seed_generator, is_replay, rng_algorithm=rng_algorithm)
    result = roll_action(
        DualityRollRequest(
            modifier=modifier,
            difficulty=difficulty,
            seed=resolved.seed,
            rng_algorithm=resolved.rng_algorithm,
        )
    )
    return ActionRollResult(result=result, resolved_seed=resolved)


__all__ = [
    "OutcomeRequest",
    "DualityRollRequest",
    "OutcomeResult",
    "ActionRollResult",
    "validate_difficulty",
    "classify_outcome",
    "evaluate_outcome",
    "roll_action",
    "action_roll",
]
