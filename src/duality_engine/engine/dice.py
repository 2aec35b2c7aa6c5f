"""Generic seeded dice rolling.

This module rolls an ordered list of die specifications against a
pseudo-random generator built fresh from the request's seed. Two calls
with the same seed, algorithm and specifications always produce the same
results in the same order.

Dice notation such as ``"2d6+1d8"`` can be turned into specifications
with :func:`parse_dice_notation`, which uses the d20 library's parser.

Example:
    >>> result = roll_dice(DiceRollRequest(dice=(DieSpec(sides=6, count=2),), seed=42))
    >>> len(result.rolls)
    1
"""

from __future__ import annotations

from collections.abc import Sequence

import d20
from d20 import diceast
from pydantic import BaseModel, ConfigDict, Field, computed_field

from duality_engine.core.constants import INT64_MAX, INT64_MIN
from duality_engine.core.exceptions import (
    InvalidDiceSpecError,
    MissingDiceError,
    SeedOutOfRangeError,
)
from duality_engine.core.logging import get_logger
from duality_engine.engine.rng import DEFAULT_RNG_ALGORITHM, new_generator


logger = get_logger(__name__)


class DieSpec(BaseModel):
    """One entry of a roll request: ``count`` dice with ``sides`` faces.

    Attributes:
        sides: Number of faces per die; must be positive.
        count: Number of dice to roll; must be positive.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sides: int = Field(description="Faces per die")
    count: int = Field(description="Number of dice")

    @property
    def notation(self) -> str:
        """Standard notation for this spec, e.g. ``2d6``."""
        return f"{self.count}d{self.sides}"


class Roll(BaseModel):
    """Results of rolling one DieSpec.

    Attributes:
        sides: Faces per die.
        results: Individual die values in draw order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    sides: int
    results: tuple[int, ...]

    @computed_field(description="Sum of the individual results")
    @property
    def total(self) -> int:
        """Sum of all results."""
        return sum(self.results)


class DiceRollRequest(BaseModel):
    """A seeded request to roll several dice specifications in order.

    Attributes:
        dice: Specifications to roll, in order.
        seed: Signed 64-bit seed for the generator.
        rng_algorithm: Algorithm ID the generator is built with.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dice: tuple[DieSpec, ...] = ()
    seed: int
    rng_algorithm: str = DEFAULT_RNG_ALGORITHM


class DiceRollResult(BaseModel):
    """Aggregate result of a DiceRollRequest.

    ``rolls`` has one entry per requested spec, in request order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rolls: tuple[Roll, ...]
    seed: int
    rng_algorithm: str

    @computed_field(description="Sum of every roll total")
    @property
    def total(self) -> int:
        """Sum of all roll totals."""
        return sum(roll.total for roll in self.rolls)


def validate_dice(dice: Sequence[DieSpec]) -> None:
    """Validate dice specifications in request order.

    Args:
        dice: Specifications to check.

    Raises:
        MissingDiceError: If ``dice`` is empty.
        InvalidDiceSpecError: For the first spec with non-positive sides or count.
    """
    if not dice:
        raise MissingDiceError("At least one die specification is required", field_name="dice")
    for index, spec in enumerate(dice):
        if spec.sides <= 0 or spec.count <= 0:
            raise InvalidDiceSpecError(
                "Die specification requires positive sides and count",
                index=index,
                sides=spec.sides,
                count=spec.count,
            )


def validate_seed(seed: int) -> None:
    """Ensure ``seed`` fits in a signed 64-bit integer.

    Raises:
        SeedOutOfRangeError: If it does not.
    """
    if not INT64_MIN <= seed <= INT64_MAX:
        raise SeedOutOfRangeError("Seed must be a signed 64-bit integer", seed=seed)


def roll_dice(request: DiceRollRequest) -> DiceRollResult:
    """Roll every die specification in a request.

    Args:
        request: Specifications, seed and algorithm to roll with.

    Returns:
        One Roll per specification, in request order.

    Raises:
        MissingDiceError: If the request has no dice.
        InvalidDiceSpecError: If any specification is invalid.
        SeedOutOfRangeError: If the seed is not a signed 64-bit integer.
        UnknownRngAlgorithmError: If the algorithm is not registered.
    """
    validate_dice(request.dice)
    validate_seed(request.seed)

    generator = new_generator(request.seed, request.rng_algorithm)
    logger.debug(
        "Rolling dice",
        dice=[spec.notation for spec in request.dice],
        seed=request.seed,
        rng_algorithm=request.rng_algorithm,
    )

    rolls = tuple(
        Roll(
            sides=spec.sides,
            results=tuple(generator.roll_die(spec.sides) for _ in range(spec.count)),
        )
        for spec in request.dice
    )
    result = DiceRollResult(rolls=rolls, seed=request.seed, rng_algorithm=request.rng_algorithm)

    logger.debug("Dice rolled", total=result.total, rolls=len(result.rolls))
    return result


def parse_dice_notation(expression: str) -> list[DieSpec]:
    """Parse dice notation into die specifications.

    Only dice terms joined by ``+`` are accepted, e.g. ``"2d6+1d8"`` or
    ``"d20"``. ``d%`` is read as a 100-sided die.

    Args:
        expression: Dice notation.

    Returns:
        Specifications in the order they appear.

    Raises:
        MissingDiceError: If the notation is empty.
        InvalidDiceSpecError: If the notation does not parse, uses anything
            other than plain dice joined by ``+``, or names a zero-sided die
            or zero dice.
    """
    if not expression or not expression.strip():
        raise MissingDiceError("Empty dice notation", field_name="expression")

    try:
        parsed = d20.parse(expression)
    except d20.RollSyntaxError as exc:
        raise InvalidDiceSpecError(
            f"Invalid dice notation: {exc}",
            expression=expression,
        ) from exc

    specs: list[DieSpec] = []
    _collect_dice(parsed.roll, expression, specs)
    validate_dice(specs)
    return specs


def _collect_dice(node: diceast.Node, expression: str, specs: list[DieSpec]) -> None:
    if isinstance(node, diceast.OperatedDice):
        if node.operations:
            raise InvalidDiceSpecError(
                "Dice operations are not supported",
                expression=expression,
            )
        _collect_dice(node.value, expression, specs)
    elif isinstance(node, diceast.Dice):
        sides = 100 if node.size == "%" else int(node.size)
        specs.append(DieSpec(sides=sides, count=int(node.num)))
    elif isinstance(node, diceast.BinOp) and node.op == "+":
        _collect_dice(node.left, expression, specs)
        _collect_dice(node.right, expression, specs)
    elif isinstance(node, diceast.Parenthetical | diceast.AnnotatedNumber):
        _collect_dice(node.value, expression, specs)
    else:
        raise InvalidDiceSpecError(
            "Only dice terms joined by '+' are supported",
            expression=expression,
        )


__all__ = [
    "DieSpec",
    "Roll",
    "DiceRollRequest",
    "DiceRollResult",
    "validate_dice",
    "validate_seed",
    "roll_dice",
    "parse_dice_notation",
]
