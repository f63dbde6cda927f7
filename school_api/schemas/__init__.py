"""
Schemas module - Request/Response schemas for API endpoints.
"""
from school_api.schemas.schemas import (
    ErrorResponse,
    MessageResponse,
    NotFoundResponse,
    SchoolCreate,
    SchoolResponse,
    SchoolUpdate,
)

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "NotFoundResponse",
    "SchoolCreate",
    "SchoolResponse",
    "SchoolUpdate",
]
