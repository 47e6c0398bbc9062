"""Users API Client — async httpx wrapper around /api/users.

Invariants:
    - Non-2xx responses raise ApiError with the server's "error" text, or a
      per-call fallback when the body carries none
    - A 2xx body that is not JSON raises ApiError("Invalid response from server")
    - Transport failures propagate as httpx.HTTPError
    - Every call (success or failure) is reported to the sink
"""

import time
from typing import Any

import httpx

from userhub.core.observability_sink import ApiCall, ObservabilitySink
from userhub.infrastructure.observability import LoggingSink

CREATE_FALLBACK_MESSAGE = "Failed to create user"
LIST_FALLBACK_MESSAGE = "Failed to fetch users"
INVALID_RESPONSE_MESSAGE = "Invalid response from server"


class ApiError(Exception):
    """Server answered with an error status or an unreadable body."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return fallback


class UsersApiClient:
    """Client for the list and create endpoints."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sink: ObservabilitySink | None = None,
        timeout: float = 10.0,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url, transport=transport, timeout=timeout,
        )
        self._sink = sink or LoggingSink()

    async def __aenter__(self) -> "UsersApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def list_users(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/users", LIST_FALLBACK_MESSAGE)

    async def create_user(self, name: str, email: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/api/users", CREATE_FALLBACK_MESSAGE,
            json={"name": name, "email": email},
        )

    async def _request(
        self, method: str, path: str, fallback: str, json: dict | None = None,
    ) -> Any:
        start = time.perf_counter()
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as e:
            self._track(method, path, start, None, error=str(e))
            raise

        if response.is_error:
            message = _error_message(response, fallback)
            self._track(method, path, start, response.status_code, error=message)
            raise ApiError(response.status_code, message)

        try:
            data = response.json()
        except ValueError:
            self._track(
                method, path, start, response.status_code,
                error=INVALID_RESPONSE_MESSAGE,
            )
            raise ApiError(response.status_code, INVALID_RESPONSE_MESSAGE)

        self._track(method, path, start, response.status_code)
        return data

    def _track(
        self,
        method: str,
        path: str,
        start: float,
        status_code: int | None,
        error: str | None = None,
    ) -> None:
        self._sink.track_api_call(ApiCall(
            method=method,
            url=path,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            success=error is None,
            error=error,
        ))
