"""Test that the README quickstart works for slow-request-policy."""
from __future__ import annotations


def test_quickstart_import() -> None:
    import slow_request_policy

    assert slow_request_policy.__version__ == "0.1.0"


def test_quickstart_score_and_store() -> None:
    from slow_request_policy import RequestScorer, StaticPercentileProvider, TrackedRequest

    scorer = RequestScorer(StaticPercentileProvider({"Controller/users/index": 0.9}))
    request = TrackedRequest.build("Controller/users/index", 1.4)

    assert scorer.score(request) > 0.9
    scorer.stored(request)
    assert "Controller/users/index" in scorer.last_seen


def test_quickstart_unknown_never_kept() -> None:
    from slow_request_policy import RequestScorer, StaticPercentileProvider, TrackedRequest

    scorer = RequestScorer(StaticPercentileProvider(default=1.0))
    assert scorer.score(TrackedRequest.build(None, 100.0)) == -1.0


def test_public_exports() -> None:
    import slow_request_policy

    for name in slow_request_policy.__all__:
        assert hasattr(slow_request_policy, name)
