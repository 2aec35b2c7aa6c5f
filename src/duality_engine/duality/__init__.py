"""Duality (Hope/Fear) dice rules: evaluation, explanation and probabilities.

Exports:
    Evaluation:
        OutcomeRequest, OutcomeResult: Known-dice input and classified result.
        DualityRollRequest, ActionRollResult: Seeded action rolls.
        evaluate_outcome: Classify known Hope and Fear values.
        roll_action: Roll Hope then Fear from a seed and classify them.
        action_roll: Resolve a seed, roll and classify.

    Explanation:
        ExplainResult, ExplainStep, Intermediates: Trace records.
        explain_outcome: Evaluate and explain a request.

    Probability:
        ProbabilityRequest, ProbabilityResult, OutcomeCount: Distribution records.
        compute_probability: Tabulate outcomes over all 144 pairs.

    Rules:
        RULES_VERSION, RulesMetadata, rules_metadata: Ruleset description.
"""

from __future__ import annotations

from duality_engine.duality.explain import (
    ExplainResult,
    ExplainStep,
    Intermediates,
    explain_outcome,
)
from duality_engine.duality.outcome import (
    ActionRollResult,
    DualityRollRequest,
    OutcomeRequest,
    OutcomeResult,
    action_roll,
    evaluate_outcome,
    roll_action,
)
from duality_engine.duality.probability import (
    OutcomeCount,
    ProbabilityRequest,
    ProbabilityResult,
    compute_probability,
)
from duality_engine.duality.rules import RULES_VERSION, RulesMetadata, rules_metadata


__all__ = [
    # Evaluation
    "OutcomeRequest",
    "OutcomeResult",
    "DualityRollRequest",
    "ActionRollResult",
    "evaluate_outcome",
    "roll_action",
    "action_roll",
    # Explanation
    "ExplainResult",
    "ExplainStep",
    "Intermediates",
    "explain_outcome",
    # Probability
    "ProbabilityRequest",
    "ProbabilityResult",
    "OutcomeCount",
    "compute_probability",
    # Rules
    "RULES_VERSION",
    "RulesMetadata",
    "rules_metadata",
]
