"""Versioned pseudo-random algorithms for reproducible dice rolls.

Every roll is drawn from a fresh generator built from a signed 64-bit
seed by an algorithm identified by a stable ID. The ID travels with the
roll result so that a caller who stored ``(seed, algorithm_id)`` can
replay the roll later. Once an ID is published its output stream is
frozen: a changed algorithm gets a new ID and the old one stays
registered.

Registered algorithms:
    mt19937-v1: CPython's Mersenne Twister (``random.Random``) drawing
        with ``randint``.
    pcg64-v1: numpy's PCG64 bit generator, with dice drawn from raw
        64-bit outputs by rejection sampling.

Example:
    >>> generator = new_generator(42)
    >>> 1 <= generator.roll_die(12) <= 12
    True
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Protocol

import numpy as np

from duality_engine.core.constants import UINT64_MASK
from duality_engine.core.exceptions import ConfigurationError, UnknownRngAlgorithmError


RNG_ALGO_MT19937_V1 = "mt19937-v1"
RNG_ALGO_PCG64_V1 = "pcg64-v1"

DEFAULT_RNG_ALGORITHM = RNG_ALGO_MT19937_V1

_RAW_SPAN = 1 << 64


class DieGenerator(Protocol):
    """A per-call source of uniformly distributed die faces."""

    algorithm_id: str

    def roll_die(self, sides: int) -> int:
        """Draw one value uniformly from ``[1, sides]``."""
        ...


class MersenneTwisterGenerator:
    """Mersenne Twister generator pinned as ``mt19937-v1``.

    The seed is reduced to its unsigned 64-bit form before seeding so
    that negative seeds do not collide with their absolute values.
    """

    algorithm_id = RNG_ALGO_MT19937_V1

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed & UINT64_MASK)

    def roll_die(self, sides: int) -> int:
        return self._rng.randint(1, sides)


class PCG64Generator:
    """PCG64 generator pinned as ``pcg64-v1``.

    Only the bit generator's raw stream is used; numpy's distribution
    methods are free to change between releases, the raw stream is not.
    """

    algorithm_id = RNG_ALGO_PCG64_V1

    def __init__(self, seed: int) -> None:
        self._bits = np.random.PCG64(seed & UINT64_MASK)

    def roll_die(self, sides: int) -> int:
        # Largest multiple of sides that fits in 64 bits; reject above it.
        limit = _RAW_SPAN - (_RAW_SPAN % sides)
        while True:
            raw = int(self._bits.random_raw())
            if raw < limit:
                return raw % sides + 1


_ALGORITHMS: dict[str, Callable[[int], DieGenerator]] = {
    RNG_ALGO_MT19937_V1: MersenneTwisterGenerator,
    RNG_ALGO_PCG64_V1: PCG64Generator,
}


def available_algorithms() -> tuple[str, ...]:
    """Return registered algorithm IDs in registration order."""
    return tuple(_ALGORITHMS)


def register_algorithm(algorithm_id: str, factory: Callable[[int], DieGenerator]) -> None:
    """Register a new RNG algorithm under a fresh ID.

    Args:
        algorithm_id: Stable identifier for the algorithm.
        factory: Callable building a generator from a signed 64-bit seed.

    Raises:
        ConfigurationError: If the ID is empty or already registered.
    """
    if not algorithm_id:
        raise ConfigurationError("RNG algorithm ID must not be empty", config_key="rng_algorithm")
    if algorithm_id in _ALGORITHMS:
        raise ConfigurationError(
            f"RNG algorithm {algorithm_id!r} is already registered",
            config_key="rng_algorithm",
        )
    _ALGORITHMS[algorithm_id] = factory


def new_generator(seed: int, algorithm_id: str = DEFAULT_RNG_ALGORITHM) -> DieGenerator:
    """Build a fresh generator for one call.

    Args:
        seed: Signed 64-bit seed.
        algorithm_id: Registered algorithm ID.

    Returns:
        A generator that is never shared between calls.

    Raises:
        UnknownRngAlgorithmError: If the algorithm is not registered.
    """
    try:
        factory = _ALGORITHMS[algorithm_id]
    except KeyError:
        raise UnknownRngAlgorithmError(
            f"Unknown RNG algorithm {algorithm_id!r}",
            algorithm_id=algorithm_id,
            details={"available": list(_ALGORITHMS)},
        ) from None
    return factory(seed)


__all__ = [
    "RNG_ALGO_MT19937_V1",
    "RNG_ALGO_PCG64_V1",
    "DEFAULT_RNG_ALGORITHM",
    "DieGenerator",
    "MersenneTwisterGenerator",
    "PCG64Generator",
    "available_algorithms",
    "register_algorithm",
    "new_generator",
]
