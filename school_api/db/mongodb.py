"""
MongoDB Connection Utility

MongoDB stores one collection:
- schools: one document per tenant school (names, domain, storage and
  MariaDB connection details)

The client is opened by the application's startup hook and kept on
app.state; route handlers receive the database through get_mongo_db.
"""
import logging

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from school_api.core.config import Settings

logger = logging.getLogger(__name__)

# Collection name constants (avoid typos)
COLLECTIONS = {
    "schools": "schools",
}


def create_mongo_client(settings: Settings) -> MongoClient:
    """Create the MongoDB client (connection pooling handled internally by pymongo)."""
    return MongoClient(
        settings.mongodb_uri,
        serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        tz_aware=True,
    )


def get_mongo_db(request: Request) -> Database:
    """
    Dependency for FastAPI route injection.
    Usage:
        @router.get("/schools")
        def list_schools(db: Database = Depends(get_mongo_db)):
            ...
    """
    return request.app.state.mongo_db


def get_collection(db: Database, name: str) -> Collection:
    return db[COLLECTIONS[name]]


def test_mongo_connection(client: MongoClient) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes(db: Database) -> None:
    """
    Create indexes. Call this once during app startup.

    The unique index on domain is what rejects a second school with the
    same domain.
    """
    db[COLLECTIONS["schools"]].create_index(
        [("domain", ASCENDING)], unique=True, name="domain_unique"
    )
    logger.info("MongoDB indexes created successfully")
