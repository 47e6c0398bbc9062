"""Structured Logging & Sinks — JSON formatter, setup, and ObservabilitySink implementations.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (method, path, status_code, error_code, ...) surfaced when present
    - JSON format in production, human-readable when LOG_FORMAT=text
    - Sinks hold per-instance state only; nothing is tracked process-wide

Design Decisions:
    - setup_logging called once on startup via lifespan
    - LoggingSink is the default sink; InMemorySink is for development and tests
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from userhub.core.observability_sink import (
    ApiCall, ErrorRecord, Interaction, build_error_record,
)

_EXTRA_FIELDS = (
    "method", "path", "status_code", "duration_ms", "client_ip",
    "user_agent", "error_code", "user_id", "component", "action",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


class LoggingSink:
    """Sink that forwards every record to the logging system."""

    def __init__(self, logger: logging.Logger | None = None):
        self._logger = logger or logging.getLogger("userhub.tracking")

    def track_error(
        self, error: BaseException, context: dict[str, Any] | None = None,
    ) -> None:
        context = context or {}
        self._logger.error(
            f"Tracked error: {type(error).__name__}: {error}",
            extra={
                "error_code": getattr(error, "code", None),
                "path": context.get("path"),
                "component": context.get("component"),
            },
        )

    def track_api_call(self, call: ApiCall) -> None:
        self._logger.debug(
            f"API call {call.method} {call.url} -> {call.status_code}",
            extra={
                "method": call.method,
                "path": call.url,
                "status_code": call.status_code,
                "duration_ms": call.duration_ms,
            },
        )

    def track_interaction(self, interaction: Interaction) -> None:
        self._logger.debug(
            f"Interaction {interaction.component}.{interaction.action}",
            extra={
                "component": interaction.component,
                "action": interaction.action,
            },
        )


class InMemorySink:
    """Sink that keeps every record in lists for inspection."""

    def __init__(self):
        self.errors: list[ErrorRecord] = []
        self.api_calls: list[ApiCall] = []
        self.interactions: list[Interaction] = []

    def track_error(
        self, error: BaseException, context: dict[str, Any] | None = None,
    ) -> None:
        self.errors.append(build_error_record(error, context))

    def track_api_call(self, call: ApiCall) -> None:
        self.api_calls.append(call)

    def track_interaction(self, interaction: Interaction) -> None:
        self.interactions.append(interaction)

    def failed_calls(self) -> list[ApiCall]:
        return [call for call in self.api_calls if not call.success]

    def clear(self) -> None:
        self.errors.clear()
        self.api_calls.clear()
        self.interactions.clear()
