"""Request shapes understood by the scorer.

The scorer is polymorphic over any object that can name its scope layer
and report its total call time.  ``Layer`` and ``TrackedRequest`` are
concrete pydantic models satisfying those protocols, used by the CLI,
the tests, and callers without a trace model of their own.

Classes
-------
- ScopeLayer       — protocol: anything with a ``legacy_metric_name``
- ScorableRequest  — protocol: ``scope_layer()`` + ``total_call_time``
- Layer            — a named, timed unit of work inside a request
- TrackedRequest   — a completed request with a root and optional scope layer

Functions
---------
- classification_key  — derive the key used for recency and percentiles
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

UNKNOWN_KEY: str = "unknown"


@runtime_checkable
class ScopeLayer(Protocol):
    """The layer that identifies what kind of request this was."""

    @property
    def legacy_metric_name(self) -> str: ...


@runtime_checkable
class ScorableRequest(Protocol):
    """Minimal request interface consumed by ``RequestScorer``."""

    def scope_layer(self) -> ScopeLayer | None: ...

    @property
    def total_call_time(self) -> float: ...


def classification_key(request: ScorableRequest) -> str:
    """Return the classification key for ``request``.

    The scope layer's legacy metric name when the request has one,
    otherwise ``UNKNOWN_KEY``.

    ``"unknown"`` is a reserved name: a scope layer whose legacy metric name
    is literally ``"unknown"`` classifies the same as a request with no
    scope and always gets the sentinel score.  ``Layer`` names always
    contain a ``/`` and cannot collide.
    """
    scope = request.scope_layer()
    if scope is None:
        return UNKNOWN_KEY
    return scope.legacy_metric_name


class Layer(BaseModel):
    """A timed unit of work, e.g. a controller action or a background job.

    Parameters
    ----------
    type:
        Layer category such as ``"Controller"`` or ``"Job"``.
    name:
        Layer name within its category, e.g. ``"users/index"``.
    total_call_time:
        Wall time spent in this layer and its children, in seconds.
    """

    type: str = Field(min_length=1)
    name: str = Field(min_length=1)
    total_call_time: float = Field(default=0.0, ge=0.0)

    @property
    def legacy_metric_name(self) -> str:
        return f"{self.type}/{self.name}"


class TrackedRequest(BaseModel):
    """A completed request as seen by the monitoring agent.

    Parameters
    ----------
    root_layer:
        The outermost layer; its total call time is the request duration.
    scope:
        The layer naming the request, if one could be resolved.
    """

    root_layer: Layer
    scope: Layer | None = None

    def scope_layer(self) -> Layer | None:
        return self.scope

    @property
    def total_call_time(self) -> float:
        return self.root_layer.total_call_time

    @classmethod
    def build(cls, scope_name: str | None, duration: float) -> TrackedRequest:
        """Build a request from a ``"Type/name"`` scope string and duration.

        A ``scope_name`` of ``None`` or ``""`` yields a request with no
        scope, which classifies as ``UNKNOWN_KEY``.

        Raises
        ------
        ValueError
            If ``scope_name`` has no ``/`` separator or ``duration`` is
            negative.
        """
        if not scope_name:
            return cls(root_layer=Layer(type="Request", name="root", total_call_time=duration))
        layer_type, sep, name = scope_name.partition("/")
        if not sep or not layer_type or not name:
            raise ValueError(
                f"Scope name {scope_name!r} must look like 'Type/name'."
            )
        scope = Layer(type=layer_type, name=name, total_call_time=duration)
        return cls(root_layer=scope, scope=scope)
