"""
Database module - MongoDB connection and dependencies.
"""
from school_api.db.mongodb import (
    COLLECTIONS,
    create_mongo_client,
    get_mongo_db,
    init_mongo_indexes,
    test_mongo_connection,
)

__all__ = [
    "COLLECTIONS",
    "create_mongo_client",
    "get_mongo_db",
    "init_mongo_indexes",
    "test_mongo_connection",
]
