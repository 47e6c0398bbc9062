"""Request logging middleware.

Logs each request on arrival and on completion (status and duration), and
reports the call to the observability sink. Raw ASGI (no BaseHTTPMiddleware)
so streaming and background tasks are unaffected.
"""

import logging
import time
from typing import Callable

from userhub.core.observability_sink import ApiCall, ObservabilitySink

logger = logging.getLogger(__name__)


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _client_ip(scope: dict) -> str | None:
    client = scope.get("client")
    return client[0] if client else None


def RequestLoggingMiddleware(
    app: Callable, sink: ObservabilitySink | None = None,
) -> Callable:
    """Log method, path, client IP and user agent; then status and duration."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        method = scope["method"]
        path = scope["path"]
        client_ip = _client_ip(scope)
        user_agent = _get_header(scope, "user-agent")
        logger.info(
            f"{method} {path} - IP: {client_ip} - User-Agent: {user_agent}",
            extra={
                "method": method, "path": path,
                "client_ip": client_ip, "user_agent": user_agent,
            },
        )

        response_status: dict[str, int] = {}
        start = time.perf_counter()

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                response_status["code"] = message["status"]
            await send(message)

        error: str | None = None
        try:
            await app(scope, receive, send_wrapper)
        except Exception as e:
            error = str(e)
            raise
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response_status.get("code", 500)
            logger.info(
                f"{method} {path} - {status_code} - {duration_ms}ms",
                extra={
                    "method": method, "path": path,
                    "status_code": status_code, "duration_ms": duration_ms,
                },
            )
            if sink is not None:
                sink.track_api_call(ApiCall(
                    method=method,
                    url=path,
                    status_code=status_code,
                    duration_ms=duration_ms,
                    success=status_code < 400 and error is None,
                    error=error,
                ))

    return asgi_app
