"""Domain Types — identity type and client component states.

Invariants:
    - UserId wraps the server-assigned integer key
    - All component states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON and compare against literal state names
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Enums ───────────────────────────────────────────────────────

class FormStatus(str, Enum):
    """User form lifecycle."""
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class ListStatus(str, Enum):
    """User list lifecycle."""
    LOADING = "loading"
    EMPTY = "loaded-empty"
    LOADED = "loaded-nonempty"
    ERROR = "error"


class Environment(str, Enum):
    """Deployment mode — controls stack traces and static serving."""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"
