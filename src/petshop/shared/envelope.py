"""The response envelope every endpoint returns: ``{success, message, data, errors}``."""

from typing import Any

from pydantic import BaseModel


class ApiResponse(BaseModel):
    success: bool = True
    message: str = ""
    data: Any = None
    errors: list[str] | None = None


def ok(data=None, message: str = "") -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def failure(message: str, errors: list[str] | None = None) -> dict:
    return ApiResponse(success=False, message=message, data=None, errors=errors or [message]).model_dump()
