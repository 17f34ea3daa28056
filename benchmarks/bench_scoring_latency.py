"""Benchmark: RequestScorer latency — per-call p50/p99 for score and stored.

Scores and stores requests spread over a growing set of endpoint keys,
capturing the distribution of per-call times.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from slow_request_policy.percentile.static import StaticPercentileProvider
from slow_request_policy.policy.scorer import RequestScorer
from slow_request_policy.request import TrackedRequest

_KEYS: int = 2_000
_WARMUP: int = 500
_ITERATIONS: int = 20_000


def _percentile(sorted_values: list[float], fraction: float) -> float:
    n = len(sorted_values)
    return sorted_values[min(int(n * fraction), n - 1)]


def bench_scoring_latency() -> dict[str, object]:
    """Benchmark RequestScorer.score() and RequestScorer.stored().

    Returns
    -------
    dict with keys: operation, iterations, keys, ops_per_second,
    score_p50_us, score_p99_us, stored_p50_us, stored_p99_us.
    """
    provider = StaticPercentileProvider(default=0.5)
    scorer = RequestScorer(provider)
    requests = [
        TrackedRequest.build(f"Controller/endpoint{i}/index", (i % 50) / 10.0)
        for i in range(_KEYS)
    ]

    for i in range(_WARMUP):
        scorer.score(requests[i % _KEYS])

    score_us: list[float] = []
    stored_us: list[float] = []
    started = time.perf_counter()
    for i in range(_ITERATIONS):
        request = requests[i % _KEYS]
        t0 = time.perf_counter()
        scorer.score(request)
        t1 = time.perf_counter()
        scorer.stored(request)
        t2 = time.perf_counter()
        score_us.append((t1 - t0) * 1_000_000)
        stored_us.append((t2 - t1) * 1_000_000)
    total = time.perf_counter() - started

    score_us.sort()
    stored_us.sort()

    result: dict[str, object] = {
        "operation": "request_scoring_latency",
        "iterations": _ITERATIONS,
        "keys": _KEYS,
        "ops_per_second": round(_ITERATIONS / total, 1),
        "score_p50_us": round(_percentile(score_us, 0.50), 3),
        "score_p99_us": round(_percentile(score_us, 0.99), 3),
        "stored_p50_us": round(_percentile(stored_us, 0.50), 3),
        "stored_p99_us": round(_percentile(stored_us, 0.99), 3),
    }
    print(
        f"[bench_scoring_latency] {result['operation']}: "
        f"score p99={result['score_p99_us']:.3f}us  "
        f"stored p99={result['stored_p99_us']:.3f}us"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_scoring_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "scoring_latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
