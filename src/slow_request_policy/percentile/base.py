"""Abstract base class for percentile providers.

A percentile provider answers "roughly where does this duration rank among
the durations already observed for this key?".  The histogram machinery
behind the answer lives outside this package; the scorer only needs the
single lookup defined here.

Classes
-------
- PercentileProvider  — abstract base for all providers
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class PercentileProvider(ABC):
    """Protocol for approximate percentile lookups keyed by request name.

    Implementations are called from whatever threads call the scorer and
    are responsible for their own thread-safety.
    """

    @abstractmethod
    def approximate_percentile_of(self, key: str, value: float) -> float:
        """Return the approximate percentile of ``value`` for ``key``.

        Parameters
        ----------
        key:
            Classification key, as produced by ``classification_key``.
        value:
            Duration in seconds.

        Returns
        -------
        float
            Nominally in [0.0, 1.0].  Callers must not rely on the bounds.
        """
