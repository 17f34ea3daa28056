"""Point multipliers for request scoring.

The three multipliers are tunable policy knobs.  Each sub-score of a
request is multiplied by its weight before the sub-scores are summed.

Classes
-------
- ScoringWeights  — immutable, validated set of the three multipliers
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Adjust speed points.  See ``RequestScorer.speed_points``.
POINT_MULTIPLIER_SPEED: float = 0.25

# For each minute a key has not been stored.
POINT_MULTIPLIER_AGE: float = 0.25

# Outliers are worth up to "1000ms" of weight.
POINT_MULTIPLIER_PERCENTILE: float = 1.0


class ScoringWeights(BaseModel):
    """Multipliers applied to the speed, age, and percentile sub-scores.

    All weights must be non-negative so that the score stays monotonically
    non-decreasing in each signal.

    Parameters
    ----------
    speed:
        Multiplier for ``ln(1 + duration_seconds)``.
    age:
        Multiplier for minutes since the key was last stored.
    percentile:
        Multiplier for the approximate percentile of the duration.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    speed: float = Field(default=POINT_MULTIPLIER_SPEED, ge=0.0)
    age: float = Field(default=POINT_MULTIPLIER_AGE, ge=0.0)
    percentile: float = Field(default=POINT_MULTIPLIER_PERCENTILE, ge=0.0)

    def to_dict(self) -> dict[str, float]:
        """Serialise to a plain dict."""
        return {"speed": self.speed, "age": self.age, "percentile": self.percentile}


DEFAULT_WEIGHTS = ScoringWeights()
