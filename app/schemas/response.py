from typing import Any, Optional
from pydantic import BaseModel


class ApiResponse(BaseModel):
    statusCode: int
    data: Any = None
    message: str = "Success"


class ApiErrorResponse(BaseModel):
    statusCode: int
    message: str


def envelope(status_code: int, data: Any = None, message: str = "Success") -> dict:
    return ApiResponse(statusCode=status_code, data=data, message=message).model_dump()


def error_envelope(status_code: int, message: Optional[str]) -> dict:
    return ApiErrorResponse(statusCode=status_code, message=message or "Error").model_dump()
