"""Error Handlers — global exception handlers for the UserHub API.

Invariants:
    - UserHubError → its http_status with {"error": message}
    - RequestValidationError → 400 with the field's fixed message, name first
    - Exception (catch-all) → 500 with the raw message
    - 5xx responses carry "stack" unless the app runs in production
    - Every handled error is logged and reported to app.state.sink
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from userhub.core.errors import FIELD_MESSAGES, UserHubError

logger = logging.getLogger(__name__)

INVALID_REQUEST_MESSAGE = "Invalid request data"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_userhub_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_userhub_error_handler(app: FastAPI) -> None:

    @app.exception_handler(UserHubError)
    async def userhub_error_handler(request: Request, exc: UserHubError):
        """Handle all UserHub domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"UserHubError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        _track(request, exc)
        content = exc.to_response()
        if exc.http_status >= 500:
            content.update(_stack_for(request, exc))
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Map request parsing failures onto the per-field messages."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": field_error_message(exc.errors())},
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}: {exc}",
            exc_info=True,
        )
        _track(request, exc)
        content = {"error": str(exc) or "Internal Server Error"}
        content.update(_stack_for(request, exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )


def field_error_message(errors: list[dict]) -> str:
    """Pick the message for the first offending field, name before email."""
    for field_name, message in FIELD_MESSAGES.items():
        if any(field_name in error.get("loc", ()) for error in errors):
            return message
    return INVALID_REQUEST_MESSAGE


def _stack_for(request: Request, exc: BaseException) -> dict:
    settings = getattr(request.app.state, "settings", None)
    if settings is None or settings.is_production:
        return {}
    return {"stack": "".join(traceback.format_exception(exc))}


def _track(request: Request, exc: BaseException) -> None:
    sink = getattr(request.app.state, "sink", None)
    if sink is not None:
        sink.track_error(
            exc, {"path": request.url.path, "method": request.method},
        )
