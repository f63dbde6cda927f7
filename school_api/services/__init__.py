"""
Services module - store operations behind the route handlers.
"""
from school_api.services.school_service import SchoolService

__all__ = ["SchoolService"]
