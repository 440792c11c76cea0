"""Catalog inspection endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.database import get_db
from playlist_seeder.models import Media
from playlist_seeder.schemas.imports import CatalogStats, MediaListResponse, MediaResponse
from playlist_seeder.services.preflight import catalog_counts

router = APIRouter(tags=["catalog"])


@router.get("/catalog/stats", response_model=CatalogStats)
async def get_catalog_stats(db: AsyncSession = Depends(get_db)) -> CatalogStats:
    """Return the number of stored entities and links."""
    counts = await catalog_counts(db)
    return CatalogStats(**counts)


@router.get("/media", response_model=MediaListResponse)
async def list_media(
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    db: AsyncSession = Depends(get_db),
) -> MediaListResponse:
    """List the most recently stored media records."""
    total_result = await db.execute(select(func.count()).select_from(Media))
    total = total_result.scalar_one()

    result = await db.execute(select(Media).order_by(Media.created_at.desc()).limit(limit))
    media = result.scalars().all()

    return MediaListResponse(
        total=total,
        results=[MediaResponse.model_validate(item) for item in media],
    )
