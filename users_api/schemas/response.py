"""Uniform response envelope.

Every endpoint returns::

    {
        "status": "OK",        // "error" on failure
        "message": "...",
        "data": ...            // null when there is nothing to return
    }
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from users_api.schemas.users import UserResponse

T = TypeVar("T")

STATUS_OK = "OK"
STATUS_ERROR = "error"


class GenericResponse(BaseModel, Generic[T]):
    status: str = STATUS_OK
    message: str
    data: T | None = None


UserListResponse = GenericResponse[list[UserResponse]]


def error_response(message: str, data: object = None) -> GenericResponse:
    return GenericResponse(status=STATUS_ERROR, message=message, data=data)
