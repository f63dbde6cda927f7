"""
School Registry API - Main Application

FastAPI backend with:
- MongoDB for school records
- JWT bearer authentication
- OpenAPI docs at /docs and /redoc

Run: uvicorn school_api.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from school_api.api.routes import api_router
from school_api.core.config import get_settings
from school_api.core.errors import APIError, api_error_handler
from school_api.db.mongodb import create_mongo_client, init_mongo_indexes, test_mongo_connection

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="School API",
    description="""
    API for the School management system.

    ## Features
    - **Schools**: create, list, fetch, update and delete tenant schools
    - **Authentication**: every school route requires `Authorization: Bearer <token>`

    ## Databases
    - MongoDB: `schools` collection, unique on `domain`
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(APIError, api_error_handler)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """
    Open the MongoDB client and make sure the indexes exist.

    Startup fails if the indexes cannot be created: without the unique
    index on domain, duplicate schools would be accepted.
    """
    client = create_mongo_client(settings)
    db = client[settings.mongodb_db]
    try:
        init_mongo_indexes(db)
    except PyMongoError as e:
        logger.error("MongoDB index initialization failed: %s", e)
        client.close()
        raise
    app.state.mongo_client = client
    app.state.mongo_db = db


@app.on_event("shutdown")
async def shutdown_event():
    client = getattr(app.state, "mongo_client", None)
    if client is not None:
        client.close()
        logger.info("MongoDB client closed")


@app.get("/health", tags=["Health"])
def health_check():
    """Health check (no auth)."""
    client = getattr(app.state, "mongo_client", None)
    connected = client is not None and test_mongo_connection(client)
    return {
        "status": "healthy",
        "mongodb": "connected" if connected else "disconnected"
    }
