"""Import trigger endpoints."""

import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException, status

from playlist_seeder.config import ConfigurationError, get_settings
from playlist_seeder.runner import run_import
from playlist_seeder.schemas.imports import ImportAccepted
from playlist_seeder.services.errors import ImportAbortedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/imports", tags=["imports"])


async def _import_in_background(playlist_id: str) -> None:
    try:
        summary = await run_import(playlist_id)
    except ImportAbortedError as e:
        logger.error("Background import of %s aborted: %s", playlist_id, e)
        return
    logger.info(
        "Background import of %s finished: %d succeeded, %d failed",
        playlist_id,
        summary.succeeded,
        summary.failed,
    )


@router.post(
    "/playlists/{playlist_id}",
    response_model=ImportAccepted,
    status_code=status.HTTP_202_ACCEPTED,
)
async def trigger_playlist_import(
    playlist_id: str,
    background_tasks: BackgroundTasks,
) -> ImportAccepted:
    """Schedule an import of the given playlist.

    The import runs after the response is sent; progress and the summary go
    to the application log.
    """
    try:
        get_settings().require_import_config(playlist_id)
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e

    background_tasks.add_task(_import_in_background, playlist_id)
    return ImportAccepted(playlist_id=playlist_id)
