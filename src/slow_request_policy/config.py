"""Policy configuration loaded from YAML, JSON, or plain dicts.

Example document::

    weights:
      speed: 0.25
      age: 0.25
      percentile: 1.0
    max_tracked_keys: 5000
    unknown_score: -1.0

Every key is optional; omitted values fall back to the defaults.

Classes
-------
- ConfigError   — raised for unreadable or invalid configuration
- PolicyConfig  — validated scorer configuration

Functions
---------
- load_config   — read a ``PolicyConfig`` from a YAML or JSON file
- build_scorer  — construct a ``RequestScorer`` from a config
"""
from __future__ import annotations

import time
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from slow_request_policy.percentile.base import PercentileProvider
from slow_request_policy.policy.clock import Clock
from slow_request_policy.policy.scorer import UNKNOWN_SCORE, RequestScorer
from slow_request_policy.policy.weights import ScoringWeights


class ConfigError(ValueError):
    """Raised when a configuration source cannot be read or validated."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid configuration in {source!r}: {reason}")


class PolicyConfig(BaseModel):
    """Configuration parameters for ``RequestScorer``.

    Parameters
    ----------
    weights:
        Speed, age, and percentile multipliers.
    max_tracked_keys:
        Upper bound on remembered keys.  ``None`` (default) is unbounded.
    unknown_score:
        Score for requests with no resolvable scope.  Must be negative.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    max_tracked_keys: int | None = Field(default=None, ge=1)
    unknown_score: float = Field(default=UNKNOWN_SCORE, lt=0.0)

    @classmethod
    def from_dict(cls, data: dict[str, object] | None, source: str = "<dict>") -> PolicyConfig:
        """Validate ``data`` into a ``PolicyConfig``.

        Raises
        ------
        ConfigError
            If ``data`` is not a mapping or fails validation.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(source, f"expected a mapping, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(source, str(exc)) from exc


def load_config(path: str | Path) -> PolicyConfig:
    """Read a ``PolicyConfig`` from a YAML (or JSON) file.

    JSON is a subset of YAML, so both are parsed with ``yaml.safe_load``.
    An empty file yields the defaults.

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or validated.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(str(config_path), str(exc)) from exc
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(str(config_path), str(exc)) from exc
    return PolicyConfig.from_dict(data, source=str(config_path))


def build_scorer(
    config: PolicyConfig,
    percentiles: PercentileProvider,
    clock: Clock = time.time,
) -> RequestScorer:
    """Construct a ``RequestScorer`` from ``config``."""
    return RequestScorer(
        percentiles,
        weights=config.weights,
        clock=clock,
        max_tracked_keys=config.max_tracked_keys,
        unknown_score=config.unknown_score,
    )
