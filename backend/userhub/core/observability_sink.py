"""Observability Sink — contract for error, API-call and interaction tracking.

Invariants:
    - Sinks are injected (app.state.sink, component constructors), never global
    - Records are immutable snapshots with a UTC timestamp
    - Tracking never alters request or component outcomes

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with the three
      methods is a sink
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ErrorRecord:
    message: str
    error_type: str
    stack: str
    context: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class ApiCall:
    method: str
    url: str
    status_code: int | None
    duration_ms: float
    success: bool
    error: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class Interaction:
    component: str
    action: str
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)


def build_error_record(
    error: BaseException, context: dict[str, Any] | None = None,
) -> ErrorRecord:
    """Snapshot an exception with its formatted traceback. Pure."""
    return ErrorRecord(
        message=str(error),
        error_type=type(error).__name__,
        stack="".join(traceback.format_exception(error)),
        context=dict(context or {}),
    )


class ObservabilitySink(Protocol):
    """Contract for development-time tracking — implemented by infrastructure."""
    def track_error(
        self, error: BaseException, context: dict[str, Any] | None = None,
    ) -> None: ...
    def track_api_call(self, call: ApiCall) -> None: ...
    def track_interaction(self, interaction: Interaction) -> None: ...
