"""Fixed-table percentile provider.

Returns a configured percentile per key regardless of the duration asked
about.  Useful for tests, the CLI, and prototyping before a real histogram
is wired in.

Classes
-------
- StaticPercentileProvider  — dict-backed provider
"""
from __future__ import annotations

from slow_request_policy.percentile.base import PercentileProvider


class StaticPercentileProvider(PercentileProvider):
    """Percentile provider backed by a plain key -> percentile dict.

    Parameters
    ----------
    percentiles:
        Optional initial mapping.  A shallow copy is taken so the caller's
        dict is not mutated.
    default:
        Value returned for keys not present in the mapping.
    """

    def __init__(
        self,
        percentiles: dict[str, float] | None = None,
        default: float = 0.0,
    ) -> None:
        self._percentiles: dict[str, float] = dict(percentiles or {})
        self.default = default

    # ------------------------------------------------------------------
    # PercentileProvider interface
    # ------------------------------------------------------------------

    def approximate_percentile_of(self, key: str, value: float) -> float:
        """Return the configured percentile for ``key``; ``value`` is ignored."""
        return self._percentiles.get(key, self.default)

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def set(self, key: str, percentile: float) -> None:
        """Set (or replace) the percentile reported for ``key``."""
        self._percentiles[key] = percentile

    def __len__(self) -> int:
        return len(self._percentiles)

    def __repr__(self) -> str:
        return (
            f"StaticPercentileProvider(keys={len(self._percentiles)}, "
            f"default={self.default})"
        )
