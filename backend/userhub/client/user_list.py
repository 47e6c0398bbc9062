"""User List — fetches and renders every stored user.

Invariants:
    - States: loading → loaded-empty | loaded-nonempty | error
    - mount() and refresh() issue the same list request
    - Overlapping refreshes are not guarded: the last response to resolve wins
"""

import logging
from typing import Any

import httpx

from userhub.client.api import ApiError, UsersApiClient
from userhub.core.domain_types import ListStatus
from userhub.core.observability_sink import Interaction, ObservabilitySink
from userhub.infrastructure.observability import LoggingSink

logger = logging.getLogger(__name__)


class UserList:
    def __init__(
        self, client: UsersApiClient, sink: ObservabilitySink | None = None,
    ):
        self._client = client
        self._sink = sink or LoggingSink()
        self.users: list[dict[str, Any]] = []
        self.status = ListStatus.LOADING
        self.error: str | None = None

    async def mount(self) -> None:
        await self._fetch()

    async def refresh(self) -> None:
        self._sink.track_interaction(
            Interaction(component="UserList", action="refresh"),
        )
        await self._fetch()

    async def _fetch(self) -> None:
        self.status = ListStatus.LOADING
        self.error = None
        try:
            users = await self._client.list_users()
        except ApiError as e:
            self._fail(e.message)
            return
        except httpx.HTTPError as e:
            self._fail(str(e) or "Failed to fetch users")
            return
        self.users = users
        self.status = ListStatus.LOADED if users else ListStatus.EMPTY

    def _fail(self, message: str) -> None:
        logger.warning(f"Fetching users failed: {message}")
        self.status = ListStatus.ERROR
        self.error = message

    def render(self) -> str:
        lines = ["Users"]
        if self.status is ListStatus.LOADING:
            lines.append("Loading users...")
        elif self.status is ListStatus.ERROR:
            lines.append(f"Error: {self.error}")
        elif self.status is ListStatus.EMPTY:
            lines.append("No users found.")
        else:
            lines.extend(f"{u['name']} - {u['email']}" for u in self.users)
        return "\n".join(lines)
