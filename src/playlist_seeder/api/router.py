"""Main API router aggregation."""

from fastapi import APIRouter

from playlist_seeder.api.catalog import router as catalog_router
from playlist_seeder.api.imports import router as imports_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(catalog_router)
api_router.include_router(imports_router)
