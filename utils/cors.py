import json
from typing import Optional, Union

from flask import Response

from auth.errors import AuthError, HashingError


def cors_response(
    body: Union[str, bytes] = b"",
    status: int = 200,
    mime: str = "text/plain"
) -> Response:
    return Response(
        response=body,
        status=status,
        mimetype=mime,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
        },
    )


def json_response(payload: dict, status: int = 200) -> Response:
    return cors_response(json.dumps(payload), status, "application/json")


def success_response(message: str, data: Optional[dict] = None, status: int = 200) -> Response:
    payload = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    return json_response(payload, status)


def error_response(error: Optional[AuthError] = None) -> Response:
    """Render a typed failure. ``None`` and hashing failures become a bare internal error."""
    if error is None or isinstance(error, HashingError):
        return json_response(
            {"success": False, "error": "InternalError", "message": "Internal server error"},
            500,
        )
    return json_response(error.to_dict(), error.status)
