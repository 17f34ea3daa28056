"""Offline scoring of a described batch of requests.

Reads a document listing per-key percentiles and a batch of requests,
replays the "stored" history it describes against a ``ManualClock``, and
scores every request as of ``uptime`` seconds after start-up.  Backs the
``score`` CLI command and is handy for tuning weights.

Document format::

    default_percentile: 0.0
    percentiles:
      Controller/users/index: 0.95
    requests:
      - scope: Controller/users/index
        duration: 1.8
        stored_ago: 120      # optional: seconds since this key was stored
      - scope: null          # unresolvable scope -> "unknown"
        duration: 4.0

Classes
-------
- RequestEntry    — one request line of the document
- ScoreDocument   — the whole document

Functions
---------
- load_document   — read a ``ScoreDocument`` from YAML or JSON
- simulate        — score every request in a document
"""
from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from slow_request_policy.config import ConfigError, PolicyConfig, build_scorer
from slow_request_policy.percentile.static import StaticPercentileProvider
from slow_request_policy.policy.clock import ManualClock
from slow_request_policy.policy.scorer import ScoreBreakdown
from slow_request_policy.request import TrackedRequest


class RequestEntry(BaseModel):
    """A request to score, optionally with a stored-at offset."""

    model_config = ConfigDict(extra="forbid")

    scope: str | None = None
    duration: float = Field(ge=0.0)
    stored_ago: float | None = Field(default=None, ge=0.0)

    def to_request(self) -> TrackedRequest:
        return TrackedRequest.build(self.scope, self.duration)


class ScoreDocument(BaseModel):
    """Percentile table plus the requests to score."""

    model_config = ConfigDict(extra="forbid")

    default_percentile: float = 0.0
    percentiles: dict[str, float] = Field(default_factory=dict)
    requests: list[RequestEntry] = Field(default_factory=list)


def load_document(path: str | Path) -> ScoreDocument:
    """Read a ``ScoreDocument`` from a YAML or JSON file.

    Raises
    ------
    ConfigError
        If the file cannot be read, parsed, or validated.
    """
    doc_path = Path(path)
    try:
        data = yaml.safe_load(doc_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(str(doc_path), str(exc)) from exc
    if data is None:
        return ScoreDocument()
    try:
        return ScoreDocument.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(str(doc_path), str(exc)) from exc


def simulate(
    document: ScoreDocument,
    config: PolicyConfig | None = None,
    uptime: float = 0.0,
) -> list[ScoreBreakdown]:
    """Score every request in ``document`` as of ``uptime`` seconds after start.

    Entries with ``stored_ago`` are first replayed as ``stored`` calls, oldest
    first, at ``uptime - stored_ago``.  When several entries share a key the
    most recent of their stored times wins.

    Returns
    -------
    list[ScoreBreakdown]
        One breakdown per request, in document order.

    Raises
    ------
    ValueError
        If a request's scope is not of the form ``Type/name``, or its
        ``stored_ago`` exceeds ``uptime``.
    """
    cfg = config if config is not None else PolicyConfig()
    clock = ManualClock(0.0)
    provider = StaticPercentileProvider(
        document.percentiles, default=document.default_percentile
    )
    scorer = build_scorer(cfg, provider, clock=clock)

    for index, entry in enumerate(document.requests):
        if entry.stored_ago is not None and entry.stored_ago > uptime:
            raise ValueError(
                f"Request {index} ({entry.scope!r}) has stored_ago={entry.stored_ago:g}, "
                f"more than the uptime of {uptime:g}s; nothing is stored before start-up."
            )

    requests = [entry.to_request() for entry in document.requests]

    history = sorted(
        (
            (uptime - entry.stored_ago, request)
            for entry, request in zip(document.requests, requests)
            if entry.stored_ago is not None
        ),
        key=lambda pair: pair[0],
    )
    for stored_at, request in history:
        clock.set(stored_at)
        scorer.stored(request)

    clock.set(uptime)
    return [scorer.explain(request) for request in requests]
