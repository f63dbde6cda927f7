"""
Error taxonomy.

Services raise SchoolError subclasses. Routes turn them into APIError with
the static message of the operation, and api_error_handler renders it:

    not_found          -> 404 {"msg": ...}
    validation_failed  -> 500 {"error": ...}
    store_unavailable  -> 500 {"error": ...}

The underlying cause never reaches the response body.
"""

from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse


class ErrorKind(str, Enum):
    validation_failed = "validation_failed"
    not_found = "not_found"
    store_unavailable = "store_unavailable"


STATUS_CODES = {
    ErrorKind.validation_failed: 500,
    ErrorKind.not_found: 404,
    ErrorKind.store_unavailable: 500,
}

NOT_FOUND_MESSAGE = "School not found"


class SchoolError(Exception):
    """Base class for failures raised by the school service."""
    kind: ErrorKind = ErrorKind.store_unavailable


class SchoolValidationError(SchoolError):
    """Payload, identifier or uniqueness constraint rejected before/at write."""
    kind = ErrorKind.validation_failed


class SchoolNotFoundError(SchoolError):
    kind = ErrorKind.not_found


class StoreUnavailableError(SchoolError):
    kind = ErrorKind.store_unavailable


class APIError(Exception):
    """Boundary error: a kind plus the message shown to the caller."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    @classmethod
    def from_error(cls, exc: SchoolError, message: str) -> "APIError":
        if exc.kind == ErrorKind.not_found:
            return cls(exc.kind, NOT_FOUND_MESSAGE)
        return cls(exc.kind, message)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    key = "msg" if exc.kind == ErrorKind.not_found else "error"
    return JSONResponse(status_code=exc.status_code, content={key: exc.message})
