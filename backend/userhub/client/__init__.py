"""Client — API client and the form/list components that drive it.

Components keep request outcomes in their own state; only render-time
exceptions reach an ErrorBoundary.
"""

from userhub.client.api import ApiError, UsersApiClient  # noqa: F401
from userhub.client.error_boundary import ErrorBoundary  # noqa: F401
from userhub.client.form import UserForm  # noqa: F401
from userhub.client.page import UserManagementPage  # noqa: F401
from userhub.client.user_list import UserList  # noqa: F401
