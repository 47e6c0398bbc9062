"""User Management Page — form and list, each inside its own error boundary.

Invariants:
    - A successful create triggers a list refresh
    - A render failure in one subtree leaves the other one rendering
    - Fallbacks show error details unless the app runs in production
"""

from typing import Any

from userhub.client.api import UsersApiClient
from userhub.client.error_boundary import ErrorBoundary
from userhub.client.form import UserForm
from userhub.client.user_list import UserList
from userhub.config import get_settings
from userhub.core.observability_sink import ObservabilitySink

TITLE = "User Management"


class UserManagementPage:
    def __init__(
        self,
        client: UsersApiClient,
        *,
        show_details: bool | None = None,
        sink: ObservabilitySink | None = None,
    ):
        if show_details is None:
            show_details = not get_settings().is_production
        self.user_list = UserList(client, sink=sink)
        self.form = UserForm(
            client, on_user_created=self._handle_user_created, sink=sink,
        )
        self.form_boundary = ErrorBoundary(
            self.form.render, name="UserForm",
            show_details=show_details, sink=sink,
        )
        self.list_boundary = ErrorBoundary(
            self.user_list.render, name="UserList",
            show_details=show_details, sink=sink,
        )

    async def mount(self) -> None:
        await self.user_list.mount()

    async def _handle_user_created(self, user: dict[str, Any]) -> None:
        await self.user_list.refresh()

    def render(self) -> str:
        return "\n\n".join([
            TITLE,
            self.form_boundary.render(),
            self.list_boundary.render(),
        ])
