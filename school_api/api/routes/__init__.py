"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from school_api.api.routes.school_routes import router as school_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(school_router)
