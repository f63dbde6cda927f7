"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, timezone


# ============================================================
# TIMESTAMPS
# MongoDB keeps millisecond precision; naive values are UTC
# ============================================================

def as_utc(value: datetime) -> datetime:
    """Normalise to aware UTC, truncated to milliseconds. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utc_now() -> datetime:
    return as_utc(datetime.now(timezone.utc))


# ============================================================
# SCHOOL SCHEMAS
# ============================================================

class SchoolCreate(BaseModel):
    fa_name: str = Field(..., min_length=1)
    en_name: str = Field(..., min_length=1)
    domain: str = Field(..., min_length=1)
    storage_bucket: str = Field(..., min_length=1)
    mariadb_db_name: str = Field(..., min_length=1)
    mariadb_username: str = Field(..., min_length=1)
    # TODO: encrypt at rest once the tenant provisioning service can read encrypted credentials
    mariadb_password: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalise_timestamp(cls, value):
        return as_utc(value) if value is not None else value


class SchoolUpdate(BaseModel):
    """Partial update. Only the fields present in the body are written."""
    fa_name: Optional[str] = Field(None, min_length=1)
    en_name: Optional[str] = Field(None, min_length=1)
    domain: Optional[str] = Field(None, min_length=1)
    storage_bucket: Optional[str] = Field(None, min_length=1)
    mariadb_db_name: Optional[str] = Field(None, min_length=1)
    mariadb_username: Optional[str] = Field(None, min_length=1)
    mariadb_password: Optional[str] = Field(None, min_length=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("*")
    @classmethod
    def reject_null(cls, value, info):
        # required fields cannot be cleared
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if isinstance(value, datetime):
            return as_utc(value)
        return value


class SchoolResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    fa_name: str
    en_name: str
    domain: str
    storage_bucket: str
    mariadb_db_name: str
    mariadb_username: str
    mariadb_password: str
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, value):
        return str(value)

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalise_timestamp(cls, value):
        return as_utc(value)


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    msg: str

class NotFoundResponse(BaseModel):
    msg: str = "School not found"

class ErrorResponse(BaseModel):
    error: str
