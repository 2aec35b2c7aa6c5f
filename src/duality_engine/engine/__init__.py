"""Generic dice engine: versioned RNG algorithms, seeded rolling and seed resolution.

Exports:
    RNG:
        DEFAULT_RNG_ALGORITHM: Algorithm ID used when none is named.
        available_algorithms: Registered algorithm IDs.
        new_generator: Build a fresh per-call generator.

    Dice:
        DieSpec, Roll, DiceRollRequest, DiceRollResult: Roll value records.
        roll_dice: Roll a request's specifications in order.
        parse_dice_notation: Turn notation like ``2d6+1d8`` into DieSpecs.

    Seeds:
        SeedGenerator: Injected capability producing fresh seeds.
        SeedDirective, ResolvedSeed: Seed resolution input and output.
        resolve_seed: Pick a replay or fresh seed.
"""

from __future__ import annotations

from duality_engine.engine.dice import (
    DiceRollRequest,
    DiceRollResult,
    DieSpec,
    Roll,
    parse_dice_notation,
    roll_dice,
)
from duality_engine.engine.rng import (
    DEFAULT_RNG_ALGORITHM,
    RNG_ALGO_MT19937_V1,
    RNG_ALGO_PCG64_V1,
    available_algorithms,
    new_generator,
    register_algorithm,
)
from duality_engine.engine.seed import (
    CallbackSeedGenerator,
    ResolvedSeed,
    SeedDirective,
    SeedGenerator,
    is_replay_mode,
    resolve_seed,
)


__all__ = [
    # RNG
    "DEFAULT_RNG_ALGORITHM",
    "RNG_ALGO_MT19937_V1",
    "RNG_ALGO_PCG64_V1",
    "available_algorithms",
    "new_generator",
    "register_algorithm",
    # Dice
    "DieSpec",
    "Roll",
    "DiceRollRequest",
    "DiceRollResult",
    "roll_dice",
    "parse_dice_notation",
    # Seeds
    "SeedGenerator",
    "CallbackSeedGenerator",
    "SeedDirective",
    "ResolvedSeed",
    "is_replay_mode",
    "resolve_seed",
]
