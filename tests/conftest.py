"""Pytest configuration and shared fixtures.

This module provides common fixtures for the Duality engine test suite:
settings isolation, substitute seed generators, and sample requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from duality_engine.service import DualityService


# =============================================================================
# Seed Generators
# =============================================================================


class FixedSeedGenerator:
    """Seed generator returning a preset sequence, counting calls."""

    def __init__(self, *seeds: int) -> None:
        self._seeds = list(seeds)
        self.calls = 0

    def next_seed(self) -> int:
        seed = self._seeds[min(self.calls, len(self._seeds) - 1)]
        self.calls += 1
        return seed


class FailingSeedGenerator:
    """Seed generator that always raises."""

    def __init__(self) -> None:
        self.calls = 0

    def next_seed(self) -> int:
        self.calls += 1
        raise RuntimeError("entropy pool exhausted")


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from duality_engine.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty directory with no engine environment variables."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "DUALITY_ENGINE_LOG_LEVEL",
        "DUALITY_ENGINE_DEBUG",
        "DUALITY_ENGINE_JSON_LOGS",
        "DUALITY_ENGINE_DICE_RNG_ALGORITHM",
    ):
        monkeypatch.delenv(var, raising=False)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def fixed_seed_generator() -> FixedSeedGenerator:
    """Seed generator always yielding 42.

    Returns:
        FixedSeedGenerator instance.
    """
    return FixedSeedGenerator(42)


@pytest.fixture
def make_seed_generator() -> type[FixedSeedGenerator]:
    """Factory for seed generators yielding chosen seeds.

    Returns:
        The FixedSeedGenerator class.
    """
    return FixedSeedGenerator


@pytest.fixture
def failing_seed_generator() -> FailingSeedGenerator:
    """Seed generator that raises on every call.

    Returns:
        FailingSeedGenerator instance.
    """
    return FailingSeedGenerator()


@pytest.fixture
def duality_service(fixed_seed_generator: FixedSeedGenerator) -> DualityService:
    """Create a DualityService backed by the fixed seed generator.

    Returns:
        DualityService instance.
    """
    from duality_engine.service import DualityService

    return DualityService(fixed_seed_generator)


@pytest.fixture
def all_pairs() -> list[tuple[int, int]]:
    """Every ordered (hope, fear) pair.

    Returns:
        The 144 pairs in hope-major order.
    """
    return [(hope, fear) for hope in range(1, 13) for fear in range(1, 13)]
