"""Slow request scoring policy.

Classes
-------
RequestScorer    — score requests and track when each key was last stored
ScoreBreakdown   — the sub-scores behind a single score
ScoringWeights   — speed / age / percentile multipliers
ManualClock      — controllable clock for tests and simulations
"""
from __future__ import annotations

from slow_request_policy.policy.clock import Clock, ManualClock
from slow_request_policy.policy.scorer import (
    UNKNOWN_SCORE,
    RequestScorer,
    ScoreBreakdown,
)
from slow_request_policy.policy.weights import (
    DEFAULT_WEIGHTS,
    POINT_MULTIPLIER_AGE,
    POINT_MULTIPLIER_PERCENTILE,
    POINT_MULTIPLIER_SPEED,
    ScoringWeights,
)

__all__ = [
    # Scorer
    "RequestScorer",
    "ScoreBreakdown",
    "UNKNOWN_SCORE",
    # Weights
    "DEFAULT_WEIGHTS",
    "POINT_MULTIPLIER_AGE",
    "POINT_MULTIPLIER_PERCENTILE",
    "POINT_MULTIPLIER_SPEED",
    "ScoringWeights",
    # Clock
    "Clock",
    "ManualClock",
]
