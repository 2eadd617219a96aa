"""
JSON response helpers shared by the book endpoints.
"""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from api.models import ErrorResponse, ResultResponse

JSON_MEDIA_TYPE = "application/json"


def json_response(status_code: int, data: Any) -> Response:
    """
    Build a JSON response.

    A value that would serialize to ``null`` is sent as an empty body,
    keeping the status code and content type.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json")

    if data is None:
        return Response(status_code=status_code, media_type=JSON_MEDIA_TYPE)

    return JSONResponse(status_code=status_code, content=data, media_type=JSON_MEDIA_TYPE)


def error_response(status_code: int, message: str) -> Response:
    """Build an ``{"error": message}`` response."""
    return json_response(status_code, ErrorResponse(error=message))


def success_response() -> Response:
    """Build a 200 ``{"result": "success"}`` response."""
    return json_response(status.HTTP_200_OK, ResultResponse())
