"""Per-request seed resolution.

A roll either replays a seed the caller already holds or asks an
injected seed generator for a fresh one. The outcome is a ResolvedSeed
that records the seed, where it came from, the roll mode and the RNG
algorithm in effect, which is everything a caller must persist to replay
the roll later.

The engine never generates seeds itself; the host service injects a
SeedGenerator. Tests substitute a fixed generator to make rolls
predictable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from duality_engine.core.constants import INT64_MAX, INT64_MIN
from duality_engine.core.exceptions import (
    SeedGenerationError,
    SeedGeneratorUnavailableError,
    SeedOutOfRangeError,
    UnknownRngAlgorithmError,
)
from duality_engine.core.logging import get_logger
from duality_engine.engine.rng import DEFAULT_RNG_ALGORITHM, available_algorithms
from duality_engine.models.enums import RollMode, SeedSource


logger = get_logger(__name__)


class SeedGenerator(Protocol):
    """Capability producing fresh signed 64-bit seeds.

    Implementations own their thread-safety; the engine calls ``next_seed``
    at most once per request and never retries it.
    """

    def next_seed(self) -> int:
        ...


class CallbackSeedGenerator:
    """Adapt a zero-argument callable into a SeedGenerator."""

    def __init__(self, callback: Callable[[], int]) -> None:
        self._callback = callback

    def next_seed(self) -> int:
        return self._callback()


class SeedDirective(BaseModel):
    """Caller input describing how to pick a roll's seed.

    Attributes:
        explicit_seed: Seed to replay, if the caller has one.
        roll_mode: Requested roll mode.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    explicit_seed: int | None = None
    roll_mode: RollMode = RollMode.UNSPECIFIED


class ResolvedSeed(BaseModel):
    """The seed a roll will use, with enough metadata to replay it.

    Attributes:
        seed: Signed 64-bit seed.
        seed_source: Whether the caller supplied it or the server generated it.
        roll_mode: Effective roll mode (RANDOM or REPLAY).
        rng_algorithm: Algorithm ID the roll is drawn with.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    seed: int
    seed_source: SeedSource
    roll_mode: RollMode
    rng_algorithm: str


def is_replay_mode(mode: RollMode) -> bool:
    """Default replay predicate: only REPLAY replays."""
    return mode == RollMode.REPLAY


def _in_int64_range(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and INT64_MIN <= value <= INT64_MAX


def resolve_seed(
    directive: SeedDirective,
    seed_generator: SeedGenerator | None,
    is_replay: Callable[[RollMode], bool] = is_replay_mode,
    *,
    rng_algorithm: str = DEFAULT_RNG_ALGORITHM,
) -> ResolvedSeed:
    """Decide which seed a roll uses.

    The resolved ``roll_mode`` is always REPLAY or RANDOM: whatever mode the
    directive names, it reports whether ``is_replay`` chose to replay.

    Args:
        directive: The caller's seed and roll mode.
        seed_generator: Injected source of fresh seeds; may be None when the
            host only serves replays.
        is_replay: Predicate deciding whether a mode means replay.
        rng_algorithm: Algorithm ID the roll will be drawn with.

    Returns:
        The resolved seed and its provenance.

    Raises:
        UnknownRngAlgorithmError: If ``rng_algorithm`` is not registered.
        SeedOutOfRangeError: If replaying without a seed or with one outside
            the signed 64-bit range.
        SeedGeneratorUnavailableError: If a fresh seed is needed and no
            generator was injected.
        SeedGenerationError: If the generator raises or returns something
            other than a signed 64-bit integer.
    """
    if rng_algorithm not in available_algorithms():
        raise UnknownRngAlgorithmError(
            f"Unknown RNG algorithm {rng_algorithm!r}",
            algorithm_id=rng_algorithm,
        )

    if is_replay(directive.roll_mode):
        seed = directive.explicit_seed
        if seed is None:
            raise SeedOutOfRangeError("Replay requires an explicit seed", field_name="seed")
        if not _in_int64_range(seed):
            raise SeedOutOfRangeError("Seed must be a signed 64-bit integer", seed=seed)
        resolved = ResolvedSeed(
            seed=seed,
            seed_source=SeedSource.CLIENT_SUPPLIED,
            roll_mode=RollMode.REPLAY,
            rng_algorithm=rng_algorithm,
        )
    else:
        if seed_generator is None:
            logger.error("Seed generator is not configured", roll_mode=directive.roll_mode)
            raise SeedGeneratorUnavailableError(
                "Seed generator is not configured",
                config_key="seed_generator",
            )
        try:
            seed = seed_generator.next_seed()
        except Exception as exc:
            raise SeedGenerationError(
                f"Failed to generate seed: {exc}",
                details={"original_error": str(exc)},
            ) from exc
        if not _in_int64_range(seed):
            raise SeedGenerationError(
                "Seed generator returned a value outside the signed 64-bit range",
                details={"seed": seed},
            )
        resolved = ResolvedSeed(
            seed=seed,
            seed_source=SeedSource.SERVER_GENERATED,
            roll_mode=RollMode.RANDOM,
            rng_algorithm=rng_algorithm,
        )

    logger.info(
        "Seed resolved",
        seed_source=resolved.seed_source,
        roll_mode=resolved.roll_mode,
        rng_algorithm=resolved.rng_algorithm,
    )
    return resolved


__all__ = [
    "SeedGenerator",
    "CallbackSeedGenerator",
    "SeedDirective",
    "ResolvedSeed",
    "is_replay_mode",
    "resolve_seed",
]
