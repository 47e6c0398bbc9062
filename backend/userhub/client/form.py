"""User Form — submit state machine for the create-user form.

Invariants:
    - States: idle → submitting → success | error (then back via submit)
    - While submitting, submit_disabled is True and submit() is a no-op
    - Success clears both fields and invokes on_user_created(user)
    - Error keeps the entered values and stores the server message
    - Only "required" is checked client-side; all other rules live on the server
"""

import inspect
import logging
from typing import Any, Awaitable, Callable

import httpx

from userhub.client.api import ApiError, UsersApiClient
from userhub.core.domain_types import FormStatus
from userhub.core.observability_sink import Interaction, ObservabilitySink
from userhub.infrastructure.observability import LoggingSink

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to create user"
SUCCESS_MESSAGE = "Welcome aboard! User created successfully."

UserCreatedCallback = Callable[[dict[str, Any]], Awaitable[None] | None]


class UserForm:
    """Name/email form that posts to the create endpoint."""

    FIELDS = ("name", "email")

    def __init__(
        self,
        client: UsersApiClient,
        on_user_created: UserCreatedCallback | None = None,
        sink: ObservabilitySink | None = None,
    ):
        self._client = client
        self._on_user_created = on_user_created
        self._sink = sink or LoggingSink()
        self.name = ""
        self.email = ""
        self.status = FormStatus.IDLE
        self.error: str | None = None

    @property
    def submit_disabled(self) -> bool:
        return self.status is FormStatus.SUBMITTING

    def change(self, field: str, value: str) -> None:
        if field not in self.FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        setattr(self, field, value)

    def missing_fields(self) -> list[str]:
        return [f for f in self.FIELDS if not getattr(self, f)]

    async def submit(self) -> dict[str, Any] | None:
        """Post the form. Returns the created user, or None if not created."""
        if self.submit_disabled or self.missing_fields():
            return None

        self.status = FormStatus.SUBMITTING
        self.error = None
        self._sink.track_interaction(Interaction(
            component="UserForm", action="submit",
            details={"name": self.name, "email": self.email},
        ))

        try:
            user = await self._client.create_user(self.name, self.email)
        except ApiError as e:
            self._fail(e.message)
            return None
        except httpx.HTTPError as e:
            self._fail(str(e) or GENERIC_ERROR_MESSAGE)
            return None

        logger.debug(f"User created: {user}")
        self.status = FormStatus.SUCCESS
        self.name = ""
        self.email = ""
        if self._on_user_created is not None:
            result = self._on_user_created(user)
            if inspect.isawaitable(result):
                await result
        return user

    def _fail(self, message: str) -> None:
        logger.warning(f"User creation failed: {message}")
        self.status = FormStatus.ERROR
        self.error = message

    def render(self) -> str:
        button = (
            "[Creating Account...] (disabled)" if self.submit_disabled
            else "[Create User]"
        )
        lines = [
            "Add New User",
            f"Full Name: {self.name}",
            f"Email Address: {self.email}",
            button,
        ]
        if self.status is FormStatus.ERROR and self.error:
            lines.append(f"Oops! {self.error}")
        elif self.status is FormStatus.SUCCESS:
            lines.append(SUCCESS_MESSAGE)
        return "\n".join(lines)
