from http import HTTPStatus
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    message: str,
    success: bool = True,
    data: dict | list | None = None,
    status_code: HTTPStatus = HTTPStatus.OK,
) -> JSONResponse:
    """
    Wrap a result in the envelope shared by every endpoint.

    Controllers, the global error handler, the authentication middleware and
    the permission decorator all answer with:

        {"success": bool, "message": str, "data": <payload or null>}

    DTOs nested anywhere in `data` are serialized by alias, so field names reach
    the client in camelCase (`maxAttendees`, `goingCount`, ...).

    Args:
        message (str): Human readable outcome, e.g. "RSVP updated successfully".
        success (bool): False for error responses.
        data (dict | list | None): Payload; DTOs, datetimes and enums are allowed.
        status_code (HTTPStatus): Response status, 200 unless given.

    Example:
        return api_response(
            message="Event created successfully",
            data={"event": event_dto},
            status_code=HTTPStatus.CREATED,
        )
    """
    body = jsonable_encoder(
        {"success": success, "message": message, "data": data}, by_alias=True
    )
    return JSONResponse(content=body, status_code=status_code.value)
