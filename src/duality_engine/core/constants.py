"""Engine-wide constants for the Duality dice resolution engine.

This module defines the fixed numbers of the Duality mechanic and the
bounds the engine validates against.
"""

from __future__ import annotations

# =============================================================================
# Duality Dice
# =============================================================================

DUALITY_DIE_SIDES = 12
"""Number of sides on each of the Hope and Fear dice."""

DUALITY_DIE_MIN = 1
"""Lowest face of a duality die."""

DUALITY_SAMPLE_SPACE = DUALITY_DIE_SIDES * DUALITY_DIE_SIDES
"""Number of ordered (hope, fear) pairs: 144."""

MIN_DIFFICULTY = 0
"""Smallest accepted difficulty. Zero is valid; negatives are rejected."""

# =============================================================================
# Seeds
# =============================================================================

INT64_MIN = -(2**63)
"""Smallest seed representable as a signed 64-bit integer."""

INT64_MAX = 2**63 - 1
"""Largest seed representable as a signed 64-bit integer."""

UINT64_MASK = 2**64 - 1
"""Mask reducing a signed 64-bit seed to its unsigned two's-complement form."""
