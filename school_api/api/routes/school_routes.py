"""
School Routes

POST /schools - Create a school
GET /schools - List all schools
GET /schools/{school_id} - Get a school
PUT /schools/{school_id} - Update a school
DELETE /schools/{school_id} - Delete a school

Every route requires a bearer token.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends
from pymongo.database import Database

from school_api.core.auth import get_current_user
from school_api.core.errors import APIError, SchoolError
from school_api.db.mongodb import get_collection, get_mongo_db
from school_api.services.school_service import SchoolService
from school_api.schemas.schemas import (
    SchoolCreate, SchoolUpdate, SchoolResponse, MessageResponse, NotFoundResponse, ErrorResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/schools",
    tags=["Schools"],
    dependencies=[Depends(get_current_user)],
)

NOT_FOUND = {404: {"model": NotFoundResponse, "description": "School not found"}}


def server_error(description: str) -> dict:
    return {500: {"model": ErrorResponse, "description": description}}


def request_body(model) -> dict:
    # Bodies are validated by SchoolService so failures map to 500, not 422;
    # the documented schema still comes from the pydantic model.
    return {
        "requestBody": {
            "content": {"application/json": {"schema": model.model_json_schema()}},
            "required": True,
        }
    }


def get_school_service(db: Database = Depends(get_mongo_db)) -> SchoolService:
    return SchoolService(get_collection(db, "schools"))


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=201,
    summary="Create a new school",
    responses=server_error("Error creating school"),
    openapi_extra=request_body(SchoolCreate),
)
def create_school(payload: Any = Body(None), service: SchoolService = Depends(get_school_service)):
    """Create a school. `domain` must not be used by another school."""
    try:
        return service.create(payload)
    except SchoolError as e:
        logger.error("Error creating school: %s", e)
        raise APIError.from_error(e, "Error creating school") from e


@router.get(
    "",
    response_model=List[SchoolResponse],
    summary="Retrieve all schools",
    responses=server_error("Error fetching schools"),
)
def list_schools(service: SchoolService = Depends(get_school_service)):
    try:
        return service.list_all()
    except SchoolError as e:
        raise APIError.from_error(e, "Error fetching schools") from e


@router.get(
    "/{school_id}",
    response_model=SchoolResponse,
    summary="Retrieve a school by ID",
    responses={**NOT_FOUND, **server_error("Error fetching school")},
)
def get_school(school_id: str, service: SchoolService = Depends(get_school_service)):
    try:
        return service.get_by_id(school_id)
    except SchoolError as e:
        raise APIError.from_error(e, "Error fetching school") from e


@router.put(
    "/{school_id}",
    response_model=SchoolResponse,
    summary="Update a school by ID",
    responses={**NOT_FOUND, **server_error("Error updating school")},
    openapi_extra=request_body(SchoolUpdate),
)
def update_school(
    school_id: str,
    payload: Any = Body(None),
    service: SchoolService = Depends(get_school_service),
):
    """Update the supplied fields and return the updated school."""
    try:
        return service.update(school_id, payload)
    except SchoolError as e:
        raise APIError.from_error(e, "Error updating school") from e


@router.delete(
    "/{school_id}",
    response_model=MessageResponse,
    summary="Delete a school by ID",
    responses={**NOT_FOUND, **server_error("Error deleting school")},
)
def delete_school(school_id: str, service: SchoolService = Depends(get_school_service)):
    try:
        service.delete(school_id)
    except SchoolError as e:
        raise APIError.from_error(e, "Error deleting school") from e
    return MessageResponse(msg="School deleted successfully")
