"""Duality Engine - deterministic Hope/Fear dice resolution.

Rolls, classifies, explains and tabulates Duality (2d12 Hope/Fear) dice.
Every roll is reproducible from its seed and RNG algorithm ID; the seed
source itself is injected by the host service.

Example:
    >>> from duality_engine import OutcomeRequest, evaluate_outcome
    >>> evaluate_outcome(OutcomeRequest(hope=10, fear=4, difficulty=12)).outcome
    <Outcome.SUCCESS_WITH_HOPE: 'SUCCESS_WITH_HOPE'>

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Outcome, roll mode and seed source enums.
    engine: Versioned RNG algorithms, generic dice rolling, seed resolution.
    duality: Outcome evaluation, explanation, probabilities, rules metadata.
    service: Facade for transport layers.
"""

from __future__ import annotations

# Core
from duality_engine.core.config import Settings, get_settings
from duality_engine.core.exceptions import DualityEngineError
from duality_engine.core.logging import configure_logging, get_logger

# Duality rules
from duality_engine.duality import (
    RULES_VERSION,
    ExplainResult,
    OutcomeRequest,
    OutcomeResult,
    ProbabilityRequest,
    ProbabilityResult,
    action_roll,
    compute_probability,
    evaluate_outcome,
    explain_outcome,
    roll_action,
    rules_metadata,
)

# Generic dice
from duality_engine.engine import (
    DiceRollRequest,
    DiceRollResult,
    DieSpec,
    SeedDirective,
    SeedGenerator,
    parse_dice_notation,
    resolve_seed,
    roll_dice,
)
from duality_engine.models import Outcome, RollMode, SeedSource
from duality_engine.service import DualityService


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "DualityEngineError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Enums
    "Outcome",
    "RollMode",
    "SeedSource",
    # Generic dice
    "DieSpec",
    "DiceRollRequest",
    "DiceRollResult",
    "roll_dice",
    "parse_dice_notation",
    "SeedDirective",
    "SeedGenerator",
    "resolve_seed",
    # Duality
    "OutcomeRequest",
    "OutcomeResult",
    "ExplainResult",
    "ProbabilityRequest",
    "ProbabilityResult",
    "RULES_VERSION",
    "evaluate_outcome",
    "roll_action",
    "action_roll",
    "explain_outcome",
    "compute_probability",
    "rules_metadata",
    # Service
    "DualityService",
]
