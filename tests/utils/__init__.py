"""Invariant verification utilities for pool testing."""

from tests.utils.invariant_verification import (
    verify_k_invariant,
    verify_monotonic_accumulators,
    verify_reserves_backed,
    verify_share_conservation,
)

__all__ = [
    "verify_k_invariant",
    "verify_monotonic_accumulators",
    "verify_reserves_backed",
    "verify_share_conservation",
]
