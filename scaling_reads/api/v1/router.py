"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from scaling_reads.api.v1.dependencies.
"""

from fastapi import APIRouter

from scaling_reads.api.v1.endpoints import albums, health

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(albums.router, prefix="/albums", tags=["albums"])
