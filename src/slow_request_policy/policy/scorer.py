"""Request scorer — decides how interesting a completed request is.

Long-running, process-wide policy object.  Every completed request is
scored across three signals and the caller keeps the best-scoring
requests for detailed capture within its budget:

    speed       : ln(1 + duration_seconds) * speed weight
    percentile  : approximate percentile of the duration * percentile weight
    age         : minutes since this key was last stored * age weight

Requests whose scope cannot be resolved classify as ``"unknown"`` and
always receive a fixed negative score, so they are never good enough to
store.

The score is local to this process.  A request that wins here may still
lose when candidates from several agent processes on the same node are
merged; that merge happens downstream and is not this module's concern.

Classes
-------
- ScoreBreakdown  — the three sub-scores and their sum for one request
- RequestScorer   — scores requests and tracks when each key was stored
"""
from __future__ import annotations

import logging
import math
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass

from slow_request_policy.percentile.base import PercentileProvider
from slow_request_policy.policy.clock import Clock
from slow_request_policy.policy.weights import DEFAULT_WEIGHTS, ScoringWeights
from slow_request_policy.request import UNKNOWN_KEY, ScorableRequest, classification_key

logger = logging.getLogger(__name__)

# A negative score, never good enough to store.
UNKNOWN_SCORE: float = -1.0


# ---------------------------------------------------------------------------
# Score breakdown
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScoreBreakdown:
    """How a request's score was assembled.

    Attributes
    ----------
    key:
        Classification key of the request.
    duration:
        Duration used for scoring, in seconds.
    age:
        Seconds since the key was last stored (or since the scorer started).
    percentile:
        Value returned by the percentile provider.
    speed_points:
        Weighted ``ln(1 + duration)``.
    percentile_points:
        Weighted percentile.
    age_points:
        Weighted age in minutes.
    total:
        The score.  Equals the sum of the three point values, except for
        unknown requests where it is the fixed sentinel score.
    """

    key: str
    duration: float
    age: float
    percentile: float
    speed_points: float
    percentile_points: float
    age_points: float
    total: float

    @property
    def is_unknown(self) -> bool:
        return self.key == UNKNOWN_KEY

    def to_dict(self) -> dict[str, object]:
        """Serialise to a plain dict."""
        return {
            "key": self.key,
            "duration": self.duration,
            "age": self.age,
            "percentile": self.percentile,
            "speed_points": self.speed_points,
            "percentile_points": self.percentile_points,
            "age_points": self.age_points,
            "total": self.total,
        }


# ---------------------------------------------------------------------------
# RequestScorer
# ---------------------------------------------------------------------------


class RequestScorer:
    """Score completed requests and remember when each kind was stored.

    All public methods are thread-safe.

    Parameters
    ----------
    percentiles:
        Provider of approximate percentiles, keyed by classification key.
    weights:
        Point multipliers.  Defaults to the module-level constants.
    clock:
        Zero-argument callable returning wall-clock seconds.
        Defaults to ``time.time``.
    max_tracked_keys:
        When set, at most this many keys are remembered; the key stored
        least recently is forgotten first and falls back to the scorer's
        start time again.  The ``"unknown"`` key does not count toward the
        limit.  ``None`` (default) never forgets a key.
    unknown_score:
        Score returned for requests with no resolvable scope.  Must be
        negative.

    Example
    -------
    >>> from slow_request_policy.percentile import StaticPercentileProvider
    >>> from slow_request_policy.request import TrackedRequest
    >>> scorer = RequestScorer(StaticPercentileProvider({"Controller/users/index": 0.5}))
    >>> request = TrackedRequest.build("Controller/users/index", 1.0)
    >>> scorer.score(request) > 0
    True
    >>> scorer.score(TrackedRequest.build(None, 1.0))
    -1.0
    """

    def __init__(
        self,
        percentiles: PercentileProvider,
        *,
        weights: ScoringWeights | None = None,
        clock: Clock = time.time,
        max_tracked_keys: int | None = None,
        unknown_score: float = UNKNOWN_SCORE,
    ) -> None:
        if max_tracked_keys is not None and max_tracked_keys < 1:
            raise ValueError(
                f"max_tracked_keys must be at least 1, got {max_tracked_keys!r}."
            )
        if unknown_score >= 0:
            raise ValueError(f"unknown_score must be negative, got {unknown_score!r}.")
        self._percentiles = percentiles
        self._weights = weights if weights is not None else DEFAULT_WEIGHTS
        self._clock = clock
        self._max_tracked_keys = max_tracked_keys
        self._unknown_score = unknown_score
        # Keys never stored are treated as last seen at start-up, so their
        # age is the time this scorer has been running.
        self._zero_time = clock()
        self._last_seen: OrderedDict[str, float] = OrderedDict()
        # Kept apart from the bounded map so it never takes a slot from a real key.
        self._unknown_last_seen: float | None = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def zero_time(self) -> float:
        """Clock reading captured at construction."""
        return self._zero_time

    @property
    def weights(self) -> ScoringWeights:
        """The active point multipliers."""
        return self._weights

    @property
    def max_tracked_keys(self) -> int | None:
        return self._max_tracked_keys

    @property
    def last_seen(self) -> dict[str, float]:
        """Snapshot of key -> last stored time.  Keys never stored are absent."""
        with self._lock:
            snapshot = dict(self._last_seen)
            if self._unknown_last_seen is not None:
                snapshot[UNKNOWN_KEY] = self._unknown_last_seen
        return snapshot

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def stored(self, request: ScorableRequest) -> None:
        """Record that ``request`` was kept for detailed capture.

        Resets the age of the request's classification key to zero.
        Requests classified as unknown are recorded too; it has no effect
        on their score.
        """
        key = classification_key(request)
        now = self._clock()
        evicted: str | None = None
        with self._lock:
            if key == UNKNOWN_KEY:
                previous = self._unknown_last_seen
                self._unknown_last_seen = now if previous is None else max(previous, now)
                logger.debug("Stored request for %r at %.3f", key, now)
                return
            previous = self._last_seen.get(key)
            self._last_seen[key] = now if previous is None else max(previous, now)
            self._last_seen.move_to_end(key)
            if (
                self._max_tracked_keys is not None
                and len(self._last_seen) > self._max_tracked_keys
            ):
                evicted, _ = self._last_seen.popitem(last=False)

        logger.debug("Stored request for %r at %.3f", key, now)
        if evicted is not None:
            logger.debug(
                "Forgot last-stored time for %r (limit %d keys)",
                evicted,
                self._max_tracked_keys,
            )

    def age_of(self, key: str) -> float:
        """Seconds since ``key`` was last stored, or since start-up if never."""
        now = self._clock()
        with self._lock:
            if key == UNKNOWN_KEY and self._unknown_last_seen is not None:
                last = self._unknown_last_seen
            else:
                last = self._last_seen.get(key, self._zero_time)
        return now - last

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def score(self, request: ScorableRequest) -> float:
        """Return the interestingness score of ``request``.

        Higher is more interesting.  Does not modify any state.
        """
        return self.explain(request).total

    def explain(self, request: ScorableRequest) -> ScoreBreakdown:
        """Score ``request`` and return every component of the score.

        Parameters
        ----------
        request:
            Any object satisfying ``ScorableRequest``.

        Returns
        -------
        ScoreBreakdown
            Sub-scores and total.  For unknown requests all point values
            are zero and ``total`` is the sentinel score; the percentile
            provider is not consulted.
        """
        key = classification_key(request)
        duration = max(0.0, float(request.total_call_time))

        if key == UNKNOWN_KEY:
            return ScoreBreakdown(
                key=key,
                duration=duration,
                age=0.0,
                percentile=0.0,
                speed_points=0.0,
                percentile_points=0.0,
                age_points=0.0,
                total=self._unknown_score,
            )

        age = self.age_of(key)
        percentile = self._percentiles.approximate_percentile_of(key, duration)

        speed_points = self.speed_points(duration)
        percentile_points = self.percentile_points(percentile)
        age_points = self.age_points(age)

        return ScoreBreakdown(
            key=key,
            duration=duration,
            age=age,
            percentile=percentile,
            speed_points=speed_points,
            percentile_points=percentile_points,
            age_points=age_points,
            total=speed_points + percentile_points + age_points,
        )

    # ------------------------------------------------------------------
    # Sub-scores
    # ------------------------------------------------------------------

    def speed_points(self, duration: float) -> float:
        """Weighted ``ln(1 + duration)``.

        The logarithm keeps huge durations from swamping the other signals;
        the ``1 +`` keeps the result non-negative.
        """
        return math.log1p(duration) * self._weights.speed

    def percentile_points(self, percentile: float) -> float:
        return percentile * self._weights.percentile

    def age_points(self, age: float) -> float:
        """Weighted age, with ``age`` given in seconds and scored per minute."""
        return age / 60.0 * self._weights.age

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_seen) + (self._unknown_last_seen is not None)

    def __repr__(self) -> str:
        return (
            f"RequestScorer(tracked_keys={len(self)}, "
            f"weights={self._weights.to_dict()}, "
            f"max_tracked_keys={self._max_tracked_keys})"
        )
