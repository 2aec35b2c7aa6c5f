"""In-process service facade for transports serving Duality rolls.

DualityService is what a gRPC or HTTP layer wraps. It owns the injected
seed generator and the RNG algorithm used for fresh rolls, and every roll
response reports the seed, algorithm, seed source and roll mode so the
caller can store them and replay the roll.

Errors propagate unchanged. Each carries ``client_error`` so the
transport can choose a status code: validation errors are the caller's
to fix, everything else is a server fault.

Example:
    >>> service = DualityService(CallbackSeedGenerator(lambda: 42))
    >>> response = service.action_roll(modifier=1, difficulty=12)
    >>> response.rng.seed_used
    42
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from pydantic import BaseModel, ConfigDict

from duality_engine.core.config import Settings, get_settings
from duality_engine.core.exceptions import DualityEngineError
from duality_engine.core.logging import get_logger
from duality_engine.duality.explain import ExplainResult, explain_outcome
from duality_engine.duality.outcome import (
    OutcomeRequest,
    OutcomeResult,
    action_roll,
    evaluate_outcome,
)
from duality_engine.duality.probability import (
    ProbabilityRequest,
    ProbabilityResult,
    compute_probability,
)
from duality_engine.duality.rules import RulesMetadata, rules_metadata
from duality_engine.engine.dice import (
    DiceRollRequest,
    DieSpec,
    Roll,
    parse_dice_notation,
    roll_dice,
    validate_dice,
)
from duality_engine.engine.rng import DEFAULT_RNG_ALGORITHM
from duality_engine.engine.seed import (
    ResolvedSeed,
    SeedDirective,
    SeedGenerator,
    is_replay_mode,
    resolve_seed,
)
from duality_engine.models.enums import RollMode, SeedSource


logger = get_logger(__name__)


class RngRequest(BaseModel):
    """Optional caller RNG options for a roll.

    Attributes:
        seed: Seed to replay.
        roll_mode: Requested roll mode.
        rng_algorithm: Algorithm ID to roll with; replays pass the ID reported
            with the original roll. Defaults to the service algorithm.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    seed: int | None = None
    roll_mode: RollMode = RollMode.UNSPECIFIED
    rng_algorithm: str | None = None


class RngResponse(BaseModel):
    """RNG metadata reported with every roll."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    seed_used: int
    rng_algorithm: str
    seed_source: SeedSource
    roll_mode: RollMode

    @classmethod
    def from_resolved(cls, resolved: ResolvedSeed) -> RngResponse:
        return cls(
            seed_used=resolved.seed,
            rng_algorithm=resolved.rng_algorithm,
            seed_source=resolved.seed_source,
            roll_mode=resolved.roll_mode,
        )


class ActionRollResponse(OutcomeResult):
    """A classified action roll with its RNG metadata."""

    rng: RngResponse


class RollDiceResponse(BaseModel):
    """Generic dice results with their RNG metadata."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rolls: tuple[Roll, ...]
    total: int
    rng: RngResponse


@contextmanager
def _logged_failures(operation: str) -> Iterator[None]:
    try:
        yield
    except DualityEngineError as exc:
        if exc.client_error:
            logger.info("Request rejected", operation=operation, error=exc.message, details=exc.details)
        else:
            logger.error("Request failed", operation=operation, error=exc.message, details=exc.details)
        raise


class DualityService:
    """Facade over the Duality engine for a transport layer.

    Args:
        seed_generator: Injected source of fresh seeds. Without one, only
            replay rolls succeed.
        rng_algorithm: Algorithm ID used for every roll this service makes.
        is_replay: Predicate deciding whether a roll mode means replay.
    """

    def __init__(
        self,
        seed_generator: SeedGenerator | None = None,
        *,
        rng_algorithm: str = DEFAULT_RNG_ALGORITHM,
        is_replay: Callable[[RollMode], bool] = is_replay_mode,
    ) -> None:
        self._seed_generator = seed_generator
        self._rng_algorithm = rng_algorithm
        self._is_replay = is_replay

    @classmethod
    def from_settings(
        cls,
        seed_generator: SeedGenerator | None,
        settings: Settings | None = None,
    ) -> DualityService:
        """Build a service using the configured RNG algorithm."""
        settings = settings or get_settings()
        return cls(seed_generator, rng_algorithm=settings.dice.rng_algorithm)

    @property
    def rng_algorithm(self) -> str:
        return self._rng_algorithm

    def _directive(self, rng: RngRequest | None) -> SeedDirective:
        rng = rng or RngRequest()
        return SeedDirective(explicit_seed=rng.seed, roll_mode=rng.roll_mode)

    def _algorithm(self, rng: RngRequest | None) -> str:
        if rng is not None and rng.rng_algorithm is not None:
            return rng.rng_algorithm
        return self._rng_algorithm

    def action_roll(
        self,
        *,
        modifier: int = 0,
        difficulty: int | None = None,
        rng: RngRequest | None = None,
    ) -> ActionRollResponse:
        """Roll and classify Duality dice."""
        with _logged_failures("action_roll"):
            rolled = action_roll(
                self._directive(rng),
                self._seed_generator,
                modifier=modifier,
                difficulty=difficulty,
                is_replay=self._is_replay,
                rng_algorithm=self._algorithm(rng),
            )
        return ActionRollResponse(
            **rolled.result.model_dump(),
            rng=RngResponse.from_resolved(rolled.resolved_seed),
        )

    def duality_outcome(self, request: OutcomeRequest) -> OutcomeResult:
        """Classify known dice values."""
        with _logged_failures("duality_outcome"):
            return evaluate_outcome(request)

    def duality_explain(self, request: OutcomeRequest) -> ExplainResult:
        """Classify known dice values and explain the result."""
        with _logged_failures("duality_explain"):
            return explain_outcome(request)

    def duality_probability(self, request: ProbabilityRequest) -> ProbabilityResult:
        """Tabulate outcomes for a modifier and difficulty."""
        with _logged_failures("duality_probability"):
            return compute_probability(request)

    def rules_version(self) -> RulesMetadata:
        """Describe the ruleset in effect."""
        return rules_metadata()

    def roll_dice(
        self,
        dice: Sequence[DieSpec] | str,
        *,
        rng: RngRequest | None = None,
    ) -> RollDiceResponse:
        """Roll dice specifications or dice notation.

        The dice are validated before any seed is requested.
        """
        with _logged_failures("roll_dice"):
            specs = parse_dice_notation(dice) if isinstance(dice, str) else tuple(dice)
            validate_dice(specs)
            resolved = resolve_seed(
                self._directive(rng),
                self._seed_generator,
                self._is_replay,
                rng_algorithm=self._algorithm(rng),
            )
            result = roll_dice(
                DiceRollRequest(
                    dice=tuple(specs),
                    seed=resolved.seed,
                    rng_algorithm=resolved.rng_algorithm,
                )
            )
        return RollDiceResponse(
            rolls=result.rolls,
            total=result.total,
            rng=RngResponse.from_resolved(resolved),
        )


__all__ = [
    "RngRequest",
    "RngResponse",
    "ActionRollResponse",
    "RollDiceResponse",
    "DualityService",
]
