"""
Error vocabulary shared by every service.

Stores, validators and upstream clients raise ServiceError; the FastAPI
handlers installed by common.app turn it into the JSON error envelope
{"error": <code>, "message": <text>}.
"""

from enum import Enum

from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorKind(str, Enum):
    INVALID = "INVALID"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    UPSTREAM = "UPSTREAM"
    INTERNAL = "INTERNAL"


STATUS_BY_KIND = {
    ErrorKind.INVALID: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """A failure with a machine-readable code and a human message."""

    def __init__(self, kind: ErrorKind, code: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.code = code
        self.message = message

    @property
    def status(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self):
        return f"ServiceError({self.kind.value}, {self.code!r}, {self.message!r})"


class ErrorResponse(BaseModel):
    error: str
    message: str


def error_response(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=code, message=message).model_dump(),
    )


def invalid(code: str, message: str) -> ServiceError:
    return ServiceError(ErrorKind.INVALID, code, message)
