"""Tests for the DualityService facade."""

from __future__ import annotations

import pytest

from duality_engine.core.config import DiceSettings, Settings
from duality_engine.core.exceptions import (
    InvalidDiceSpecError,
    InvalidDifficultyError,
    MissingDiceError,
    SeedGenerationError,
    SeedGeneratorUnavailableError,
    SeedOutOfRangeError,
    UnknownRngAlgorithmError,
)
from duality_engine.duality.outcome import OutcomeRequest, evaluate_outcome
from duality_engine.duality.probability import ProbabilityRequest
from duality_engine.duality.rules import RULES_VERSION
from duality_engine.engine.dice import DiceRollRequest, DieSpec, roll_dice
from duality_engine.engine.rng import RNG_ALGO_MT19937_V1, RNG_ALGO_PCG64_V1
from duality_engine.models.enums import Outcome, RollMode, SeedSource
from duality_engine.service import DualityService, RngRequest


class TestActionRoll:
    """Tests for DualityService.action_roll."""

    def test_reports_rng_metadata(self, duality_service: DualityService) -> None:
        """Responses carry everything needed to replay."""
        response = duality_service.action_roll(modifier=2, difficulty=12)

        assert response.rng.seed_used == 42
        assert response.rng.seed_source == SeedSource.SERVER_GENERATED
        assert response.rng.roll_mode == RollMode.RANDOM
        assert response.rng.rng_algorithm == duality_service.rng_algorithm
        assert response.total == response.hope + response.fear + 2

    def test_replay(self, duality_service: DualityService, fixed_seed_generator) -> None:
        """Replaying the reported seed reproduces the roll."""
        first = duality_service.action_roll(difficulty=10)
        replayed = duality_service.action_roll(
            difficulty=10,
            rng=RngRequest(seed=first.rng.seed_used, roll_mode=RollMode.REPLAY),
        )

        assert (replayed.hope, replayed.fear, replayed.outcome) == (first.hope, first.fear, first.outcome)
        assert replayed.rng.seed_source == SeedSource.CLIENT_SUPPLIED
        assert fixed_seed_generator.calls == 1

    def test_invalid_difficulty_consumes_no_seed(
        self,
        duality_service: DualityService,
        fixed_seed_generator,
    ) -> None:
        """Validation happens before seed resolution."""
        with pytest.raises(InvalidDifficultyError):
            duality_service.action_roll(difficulty=-1)

        assert fixed_seed_generator.calls == 0

    def test_without_generator(self) -> None:
        """A service without a generator only replays."""
        service = DualityService()

        with pytest.raises(SeedGeneratorUnavailableError):
            service.action_roll()

        replayed = service.action_roll(rng=RngRequest(seed=5, roll_mode=RollMode.REPLAY))
        assert replayed.rng.seed_used == 5

    def test_replay_without_seed(self, duality_service: DualityService) -> None:
        """Replay mode with no seed is a validation error."""
        with pytest.raises(SeedOutOfRangeError):
            duality_service.action_roll(rng=RngRequest(roll_mode=RollMode.REPLAY))
        with pytest.raises(SeedOutOfRangeError):
            duality_service.roll_dice("2d6", rng=RngRequest(roll_mode=RollMode.REPLAY))

    def test_generator_failure(self, failing_seed_generator) -> None:
        """Generator faults propagate as SeedGenerationError."""
        service = DualityService(failing_seed_generator)

        with pytest.raises(SeedGenerationError):
            service.action_roll()

    def test_unknown_algorithm(self, fixed_seed_generator) -> None:
        """An unregistered algorithm is rejected at roll time."""
        service = DualityService(fixed_seed_generator, rng_algorithm="nope-v9")

        with pytest.raises(UnknownRngAlgorithmError):
            service.action_roll()


class TestRollDice:
    """Tests for DualityService.roll_dice."""

    def test_specs(self, duality_service: DualityService) -> None:
        """Rolling specs matches the seeded core."""
        specs = [DieSpec(sides=6, count=2), DieSpec(sides=8, count=1)]

        response = duality_service.roll_dice(specs)
        expected = roll_dice(DiceRollRequest(dice=tuple(specs), seed=42))

        assert response.rolls == expected.rolls
        assert response.total == expected.total
        assert response.rng.seed_used == 42

    def test_notation(self, duality_service: DualityService) -> None:
        """Notation strings are parsed before rolling."""
        response = duality_service.roll_dice("2d6+1d8")

        assert [roll.sides for roll in response.rolls] == [6, 8]
        assert [len(roll.results) for roll in response.rolls] == [2, 1]

    def test_invalid_dice_consume_no_seed(
        self,
        duality_service: DualityService,
        fixed_seed_generator,
    ) -> None:
        """Dice are validated before a seed is drawn."""
        with pytest.raises(MissingDiceError):
            duality_service.roll_dice([])
        with pytest.raises(InvalidDiceSpecError):
            duality_service.roll_dice([DieSpec(sides=0, count=1)])
        with pytest.raises(InvalidDiceSpecError):
            duality_service.roll_dice("1d20+5")

        assert fixed_seed_generator.calls == 0


class TestPureOperations:
    """Tests for the operations that take no seed."""

    def test_outcome(self, duality_service: DualityService) -> None:
        request = OutcomeRequest(hope=10, fear=4, difficulty=12)
        assert duality_service.duality_outcome(request) == evaluate_outcome(request)

    def test_explain(self, duality_service: DualityService) -> None:
        result = duality_service.duality_explain(OutcomeRequest(hope=8, fear=8, modifier=2, difficulty=15))
        assert result.outcome == Outcome.CRITICAL_SUCCESS
        assert result.rules_version == RULES_VERSION

    def test_probability(self, duality_service: DualityService) -> None:
        result = duality_service.duality_probability(ProbabilityRequest(modifier=1, difficulty=14))
        assert result.total_outcomes == 144

    def test_rules_version(self, duality_service: DualityService) -> None:
        assert duality_service.rules_version().rules_version == RULES_VERSION


@pytest.mark.usefixtures("isolated_env")
class TestFromSettings:
    """Tests for building a service from configuration."""

    def test_default_algorithm(self, fixed_seed_generator) -> None:
        service = DualityService.from_settings(fixed_seed_generator, Settings())
        assert service.rng_algorithm == Settings().dice.rng_algorithm

    def test_configured_algorithm(self, fixed_seed_generator) -> None:
        settings = Settings(dice=DiceSettings(rng_algorithm=RNG_ALGO_PCG64_V1))

        service = DualityService.from_settings(fixed_seed_generator, settings)

        assert service.action_roll().rng.rng_algorithm == RNG_ALGO_PCG64_V1

    def test_environment(self, fixed_seed_generator, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DUALITY_ENGINE_DICE_RNG_ALGORITHM", RNG_ALGO_PCG64_V1)

        service = DualityService.from_settings(fixed_seed_generator)

        assert service.rng_algorithm == RNG_ALGO_PCG64_V1


class TestReplayAcrossAlgorithms:
    """Tests for replaying rolls made under another RNG algorithm."""

    def test_replay_uses_reported_algorithm(self, make_seed_generator) -> None:
        """A roll made under pcg64-v1 replays on a service defaulting to mt19937-v1."""
        original = DualityService(make_seed_generator(42), rng_algorithm=RNG_ALGO_PCG64_V1)
        replaying = DualityService(rng_algorithm=RNG_ALGO_MT19937_V1)

        first = original.roll_dice([DieSpec(sides=12, count=10)])
        replayed = replaying.roll_dice(
            [DieSpec(sides=12, count=10)],
            rng=RngRequest(
                seed=first.rng.seed_used,
                roll_mode=RollMode.REPLAY,
                rng_algorithm=first.rng.rng_algorithm,
            ),
        )

        assert first.rolls[0].results == (9, 6, 9, 10, 8, 9, 2, 5, 4, 11)
        assert replayed.rolls == first.rolls
        assert replayed.rng.rng_algorithm == RNG_ALGO_PCG64_V1

    def test_action_roll_replay_uses_reported_algorithm(self, make_seed_generator) -> None:
        """Action rolls replay with the algorithm they were made under."""
        original = DualityService(make_seed_generator(42), rng_algorithm=RNG_ALGO_PCG64_V1)
        first = original.action_roll(difficulty=15)

        replayed = DualityService().action_roll(
            difficulty=15,
            rng=RngRequest(
                seed=first.rng.seed_used,
                roll_mode=RollMode.REPLAY,
                rng_algorithm=first.rng.rng_algorithm,
            ),
        )

        assert (replayed.hope, replayed.fear) == (first.hope, first.fear) == (9, 6)

    def test_default_algorithm_when_unset(self, duality_service: DualityService) -> None:
        """Without an algorithm in the request the service default is used."""
        replayed = duality_service.roll_dice(
            [DieSpec(sides=12, count=10)],
            rng=RngRequest(seed=42, roll_mode=RollMode.REPLAY),
        )

        assert replayed.rng.rng_algorithm == RNG_ALGO_MT19937_V1
        assert replayed.rolls[0].results == (11, 2, 1, 12, 5, 4, 4, 3, 12, 2)

    def test_unknown_requested_algorithm(self, duality_service: DualityService) -> None:
        """A requested algorithm is validated before rolling."""
        with pytest.raises(UnknownRngAlgorithmError):
            duality_service.action_roll(
                rng=RngRequest(seed=1, roll_mode=RollMode.REPLAY, rng_algorithm="mt19937-v0"),
            )
