#!/usr/bin/env python3
"""Example: Quickstart — slow-request-policy

Score a stream of completed requests, keep the best few each "minute",
and watch the age signal rotate attention across endpoints.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install slow-request-policy
"""
from __future__ import annotations

import slow_request_policy
from slow_request_policy import (
    ManualClock,
    RequestScorer,
    StaticPercentileProvider,
    TrackedRequest,
)


def main() -> None:
    print(f"slow-request-policy version: {slow_request_policy.__version__}")

    # Step 1: A percentile table standing in for the agent's histograms
    percentiles = StaticPercentileProvider(
        {
            "Controller/users/index": 0.50,
            "Controller/orders/show": 0.95,
            "Job/InvoiceMailer": 0.20,
        }
    )
    clock = ManualClock(0.0)
    scorer = RequestScorer(percentiles, clock=clock)

    batch = [
        TrackedRequest.build("Controller/users/index", 0.8),
        TrackedRequest.build("Controller/orders/show", 2.4),
        TrackedRequest.build("Job/InvoiceMailer", 12.0),
        TrackedRequest.build(None, 30.0),  # no scope -> never kept
    ]

    # Step 2: Each minute, keep the top two and report them back
    for minute in range(1, 4):
        clock.advance(60.0)
        ranked = sorted(batch, key=scorer.score, reverse=True)
        winners = ranked[:2]
        for request in winners:
            scorer.stored(request)
        names = [request.scope_layer().legacy_metric_name for request in winners]  # type: ignore[union-attr]
        print(f"minute {minute}: kept {names}")

    # Step 3: Inspect how a score is assembled
    breakdown = scorer.explain(batch[0])
    print(f"\n{breakdown.key}:")
    for name, value in breakdown.to_dict().items():
        print(f"  {name:<18} {value}")


if __name__ == "__main__":
    main()
