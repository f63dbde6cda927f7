"""
School Service - CRUD operations for the schools collection.

Each method performs a single store round-trip and reports failures as
SchoolError subclasses (see school_api.core.errors).
"""

from typing import Any, List

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from school_api.core.errors import (
    SchoolNotFoundError,
    SchoolValidationError,
    StoreUnavailableError,
)
from school_api.schemas.schemas import SchoolCreate, SchoolResponse, SchoolUpdate, utc_now


# ============================================================
# HELPERS
# ============================================================

def to_object_id(school_id: str) -> ObjectId:
    """Parse a path identifier; malformed ids are a validation failure."""
    try:
        return ObjectId(school_id)
    except (InvalidId, TypeError) as e:
        raise SchoolValidationError(f"invalid school id {school_id!r}") from e


def serialize_doc(doc: dict) -> SchoolResponse:
    """
    Convert MongoDB document to the response schema.

    A stored document that no longer matches the schema is reported as a
    store failure rather than leaking a pydantic error.
    """
    try:
        return SchoolResponse.model_validate(doc)
    except ValidationError as e:
        raise StoreUnavailableError(f"malformed school document {doc.get('_id')!r}: {e}") from e


# ============================================================
# SCHOOLS COLLECTION
# ============================================================

class SchoolService:
    """
    Handles school document storage.
    One instance per request, bound to the injected collection.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    def create(self, payload: Any) -> SchoolResponse:
        """
        Validate and insert a school.

        Missing timestamps default to the creation time.
        """
        try:
            data = SchoolCreate.model_validate(payload)
        except ValidationError as e:
            raise SchoolValidationError(str(e)) from e

        now = utc_now()
        doc = data.model_dump()
        doc["created_at"] = doc["created_at"] or now
        doc["updated_at"] = doc["updated_at"] or now

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            raise SchoolValidationError(f"domain {data.domain!r} already exists") from e
        except PyMongoError as e:
            raise StoreUnavailableError(str(e)) from e

        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def list_all(self) -> List[SchoolResponse]:
        """All schools in the collection's natural order."""
        try:
            docs = list(self.collection.find({}))
        except PyMongoError as e:
            raise StoreUnavailableError(str(e)) from e
        return [serialize_doc(doc) for doc in docs]

    def get_by_id(self, school_id: str) -> SchoolResponse:
        oid = to_object_id(school_id)
        try:
            doc = self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise StoreUnavailableError(str(e)) from e
        if doc is None:
            raise SchoolNotFoundError(school_id)
        return serialize_doc(doc)

    def update(self, school_id: str, payload: Any) -> SchoolResponse:
        """
        Apply the supplied fields and return the post-update record.

        Supplied fields are validated with the same constraints as on create;
        updated_at is left untouched unless the caller sends it.
        """
        oid = to_object_id(school_id)
        try:
            changes = SchoolUpdate.model_validate(payload).model_dump(exclude_unset=True)
        except ValidationError as e:
            raise SchoolValidationError(str(e)) from e

        try:
            if changes:
                doc = self.collection.find_one_and_update(
                    {"_id": oid},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                # MongoDB rejects an empty $set
                doc = self.collection.find_one({"_id": oid})
        except DuplicateKeyError as e:
            raise SchoolValidationError(f"domain {changes.get('domain')!r} already exists") from e
        except PyMongoError as e:
            raise StoreUnavailableError(str(e)) from e

        if doc is None:
            raise SchoolNotFoundError(school_id)
        return serialize_doc(doc)

    def delete(self, school_id: str) -> None:
        oid = to_object_id(school_id)
        try:
            doc = self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            raise StoreUnavailableError(str(e)) from e
        if doc is None:
            raise SchoolNotFoundError(school_id)
