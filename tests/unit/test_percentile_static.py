"""Tests for the percentile provider package."""
from __future__ import annotations

import pytest

from slow_request_policy.percentile import PercentileProvider, StaticPercentileProvider


class TestPercentileProviderABC:
    def test_cannot_instantiate_abstract(self) -> None:
        with pytest.raises(TypeError):
            PercentileProvider()  # type: ignore[abstract]

    def test_subclass_must_implement_lookup(self) -> None:
        class _Incomplete(PercentileProvider):
            pass

        with pytest.raises(TypeError):
            _Incomplete()  # type: ignore[abstract]


class TestStaticPercentileProvider:
    def test_returns_configured_value(self) -> None:
        provider = StaticPercentileProvider({"Controller/a": 0.7})
        assert provider.approximate_percentile_of("Controller/a", 1.0) == 0.7

    def test_ignores_value(self) -> None:
        provider = StaticPercentileProvider({"Controller/a": 0.7})
        assert provider.approximate_percentile_of("Controller/a", 1_000.0) == 0.7

    def test_default_for_missing_key(self) -> None:
        provider = StaticPercentileProvider(default=0.2)
        assert provider.approximate_percentile_of("Controller/missing", 1.0) == 0.2

    def test_out_of_range_values_returned_as_is(self) -> None:
        provider = StaticPercentileProvider({"Controller/a": 1.5, "Controller/b": -0.3})
        assert provider.approximate_percentile_of("Controller/a", 0.0) == 1.5
        assert provider.approximate_percentile_of("Controller/b", 0.0) == -0.3

    def test_set_overrides(self) -> None:
        provider = StaticPercentileProvider({"Controller/a": 0.1})
        provider.set("Controller/a", 0.9)
        assert provider.approximate_percentile_of("Controller/a", 0.0) == 0.9
        assert len(provider) == 1

    def test_input_dict_not_mutated(self) -> None:
        source = {"Controller/a": 0.1}
        provider = StaticPercentileProvider(source)
        provider.set("Controller/b", 0.5)
        assert source == {"Controller/a": 0.1}

    def test_repr(self) -> None:
        assert "keys=0" in repr(StaticPercentileProvider())
