"""
School Registry API
CRUD service for tenant schools.

Architecture:
- MongoDB: school documents (names, domain, storage bucket, MariaDB credentials)
- JWT bearer tokens guard every school route
"""

__version__ = "1.0.0"
