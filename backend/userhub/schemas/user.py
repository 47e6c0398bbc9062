"""User Schemas — request body and response shape for /api/users.

Invariants:
    - UserCreate fields are optional: presence is checked by the route layer
      so "Invalid name" / "Invalid email" keep their name-first ordering
    - Fields accept any JSON value; non-strings are rejected by the
      validation pipeline in name-first order (no coercion to str)
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Create payload — raw, unsanitized values."""
    name: Any = None
    email: Any = None


class UserResponse(BaseModel):
    """Stored user as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
