"""Percentile provider package.

Classes
-------
PercentileProvider        — abstract lookup consumed by the scorer
StaticPercentileProvider  — fixed per-key values
"""
from __future__ import annotations

from slow_request_policy.percentile.base import PercentileProvider
from slow_request_policy.percentile.static import StaticPercentileProvider

__all__ = [
    "PercentileProvider",
    "StaticPercentileProvider",
]
