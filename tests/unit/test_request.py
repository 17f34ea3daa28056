"""Tests for slow_request_policy.request."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from slow_request_policy.request import (
    UNKNOWN_KEY,
    Layer,
    ScopeLayer,
    ScorableRequest,
    TrackedRequest,
    classification_key,
)


class TestLayer:
    def test_legacy_metric_name(self) -> None:
        layer = Layer(type="Controller", name="users/index", total_call_time=0.2)
        assert layer.legacy_metric_name == "Controller/users/index"

    def test_negative_call_time_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Layer(type="Controller", name="users/index", total_call_time=-1.0)

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Layer(type="Controller", name="")

    def test_satisfies_scope_protocol(self) -> None:
        assert isinstance(Layer(type="Job", name="Mailer"), ScopeLayer)


class TestTrackedRequest:
    def test_total_call_time_from_root_layer(self) -> None:
        root = Layer(type="Middleware", name="Rack", total_call_time=2.5)
        scope = Layer(type="Controller", name="users/index", total_call_time=2.0)
        request = TrackedRequest(root_layer=root, scope=scope)
        assert request.total_call_time == pytest.approx(2.5)
        assert request.scope_layer() is scope

    def test_build_with_scope(self) -> None:
        request = TrackedRequest.build("Controller/users/index", 1.25)
        assert request.total_call_time == pytest.approx(1.25)
        assert request.scope_layer() is not None
        assert classification_key(request) == "Controller/users/index"

    def test_build_keeps_nested_name(self) -> None:
        request = TrackedRequest.build("Controller/admin/users/edit", 0.1)
        assert request.scope_layer().name == "admin/users/edit"  # type: ignore[union-attr]

    def test_build_without_scope(self) -> None:
        request = TrackedRequest.build(None, 3.0)
        assert request.scope_layer() is None
        assert request.total_call_time == pytest.approx(3.0)

    def test_build_empty_scope_is_unknown(self) -> None:
        assert classification_key(TrackedRequest.build("", 0.0)) == UNKNOWN_KEY

    @pytest.mark.parametrize("bad", ["Controller", "/index", "Controller/"])
    def test_build_rejects_malformed_scope(self, bad: str) -> None:
        with pytest.raises(ValueError, match="Type/name"):
            TrackedRequest.build(bad, 1.0)

    def test_build_rejects_negative_duration(self) -> None:
        with pytest.raises(ValueError):
            TrackedRequest.build("Controller/users/index", -0.1)

    def test_satisfies_request_protocol(self) -> None:
        assert isinstance(TrackedRequest.build("Job/Mailer", 0.0), ScorableRequest)


class TestClassificationKey:
    def test_unknown_when_no_scope(self) -> None:
        assert classification_key(TrackedRequest.build(None, 1.0)) == "unknown"

    def test_uses_legacy_metric_name(self) -> None:
        class _Scope:
            legacy_metric_name = "Job/Reindex"

        class _Request:
            total_call_time = 1.0

            def scope_layer(self) -> _Scope:
                return _Scope()

        assert classification_key(_Request()) == "Job/Reindex"  # type: ignore[arg-type]

    def test_scope_named_unknown_is_reserved(self) -> None:
        class _Scope:
            legacy_metric_name = "unknown"

        class _Request:
            total_call_time = 1.0

            def scope_layer(self) -> _Scope:
                return _Scope()

        assert classification_key(_Request()) == UNKNOWN_KEY  # type: ignore[arg-type]

    def test_layer_names_cannot_collide_with_unknown(self) -> None:
        layer = Layer(type="unknown", name="x")
        assert layer.legacy_metric_name != UNKNOWN_KEY

    def test_deterministic(self) -> None:
        request = TrackedRequest.build("Controller/users/index", 1.0)
        assert classification_key(request) == classification_key(request)
