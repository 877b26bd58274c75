from http import HTTPStatus
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import DBAPIError
from alumni_backend.common.exceptions import (
    AlumniServiceError,
    CapacityExceededError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from alumni_backend.common.fast_api_response_wrapper import api_response
from alumni_backend.common.logger import get_logger

logger = get_logger()

MASKED_SERVER_ERROR = "Internal Server Error. Please contact support."


def resolve_status(exc: Exception) -> HTTPStatus:
    """Map an exception raised by a controller or service to an HTTP status."""
    match exc:
        case NotFoundError():
            return HTTPStatus.NOT_FOUND
        case ForbiddenError():
            return HTTPStatus.FORBIDDEN
        case ConflictError() | CapacityExceededError():
            return HTTPStatus.CONFLICT
        case ValueError() | RequestValidationError():
            return HTTPStatus.BAD_REQUEST
        case RuntimeError() | DBAPIError():
            return HTTPStatus.SERVICE_UNAVAILABLE
        case _:
            return HTTPStatus.INTERNAL_SERVER_ERROR


def _feature_area(path: str) -> str:
    # /api/events/3/rsvp -> events
    segments = path.strip("/").split("/")
    return segments[1] if len(segments) > 1 else "unknown"


def _client_message(exc: Exception, status: HTTPStatus) -> str:
    if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
        return MASKED_SERVER_ERROR
    if isinstance(exc, RequestValidationError):
        first = exc.errors()[0]
        field = first.get("loc", [])[-1]
        return f"Validation Error: {field} - {first.get('msg')}"
    return str(exc)


async def global_exception_handler(request: Request, exc: Exception):
    """
    Turn any exception that escaped an endpoint into the standard envelope.

    Client errors (4xx) are logged as warnings and their message is returned
    as raised. Server errors (5xx) are logged with the stack trace, and the
    client only sees a generic message.
    """
    status = resolve_status(exc)
    is_server_error = status >= HTTPStatus.INTERNAL_SERVER_ERROR

    log = logger.error if is_server_error else logger.warning
    log(
        "[%s] %s on area [%s]: %s",
        "Server Error" if is_server_error else "Client Error",
        type(exc).__name__,
        _feature_area(request.url.path),
        str(exc),
        exc_info=is_server_error,
    )

    return api_response(
        success=False,
        message=_client_message(exc, status),
        status_code=status,
    )


def register_exception_handlers(app: FastAPI):
    """Route every unhandled exception of the app through global_exception_handler."""
    for exc_cls in (Exception, AlumniServiceError, RequestValidationError):
        app.add_exception_handler(exc_cls, global_exception_handler)
