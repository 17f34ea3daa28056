"""slow-request-policy — Decide which completed requests deserve detailed capture.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import slow_request_policy
>>> slow_request_policy.__version__
'0.1.0'
"""
from __future__ import annotations

# Scoring policy
from slow_request_policy.policy.clock import Clock, ManualClock
from slow_request_policy.policy.scorer import UNKNOWN_SCORE, RequestScorer, ScoreBreakdown
from slow_request_policy.policy.weights import (
    DEFAULT_WEIGHTS,
    POINT_MULTIPLIER_AGE,
    POINT_MULTIPLIER_PERCENTILE,
    POINT_MULTIPLIER_SPEED,
    ScoringWeights,
)

# Requests
from slow_request_policy.request import (
    UNKNOWN_KEY,
    Layer,
    ScopeLayer,
    ScorableRequest,
    TrackedRequest,
    classification_key,
)

# Percentile providers
from slow_request_policy.percentile.base import PercentileProvider
from slow_request_policy.percentile.static import StaticPercentileProvider

# Configuration
from slow_request_policy.config import ConfigError, PolicyConfig, build_scorer, load_config

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Scoring policy
    "Clock",
    "DEFAULT_WEIGHTS",
    "ManualClock",
    "POINT_MULTIPLIER_AGE",
    "POINT_MULTIPLIER_PERCENTILE",
    "POINT_MULTIPLIER_SPEED",
    "RequestScorer",
    "ScoreBreakdown",
    "ScoringWeights",
    "UNKNOWN_SCORE",
    # Requests
    "Layer",
    "ScopeLayer",
    "ScorableRequest",
    "TrackedRequest",
    "UNKNOWN_KEY",
    "classification_key",
    # Percentile providers
    "PercentileProvider",
    "StaticPercentileProvider",
    # Configuration
    "ConfigError",
    "PolicyConfig",
    "build_scorer",
    "load_config",
]
