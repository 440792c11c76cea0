"""Download and store album covers."""

import logging
import uuid

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from playlist_seeder.models import Media
from playlist_seeder.models.media import ALBUM_COVER
from playlist_seeder.schemas.external import SpotifyAlbum
from playlist_seeder.services.errors import AssetArchiveError
from playlist_seeder.services.storage import ContentStore

logger = logging.getLogger(__name__)

# Storage key prefix for covers inside the container
COVER_KEY_PREFIX = "album-covers"

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


def get_image_extension(content_type: str | None) -> str:
    """Map a MIME type to a file extension, defaulting to jpg."""
    if not content_type:
        return "jpg"
    mime = content_type.split(";", 1)[0].strip().lower()
    return IMAGE_EXTENSIONS.get(mime, "jpg")


class AssetArchiver:
    """Copies an album's cover into the content store, once per album.

    A stored `Media` row is the only record that a cover was archived, so
    an album that has one is never downloaded again, in this run or later ones.
    """

    def __init__(
        self,
        session: AsyncSession,
        store: ContentStore,
        container: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self.session = session
        self.store = store
        self.container = container
        self.http_client = http_client

    async def ensure_container(self) -> bool:
        """Create the cover container if it does not exist yet."""
        return await self.store.ensure_container(self.container)

    async def get_cover(self, album_id: int) -> Media | None:
        result = await self.session.execute(
            select(Media).where(Media.album_id == album_id, Media.type == ALBUM_COVER)
        )
        return result.scalar_one_or_none()

    async def has_cover(self, album_id: int) -> bool:
        return await self.get_cover(album_id) is not None

    async def archive_cover(self, album: SpotifyAlbum, album_id: int) -> Media | None:
        """Archive the album's largest cover image.

        Returns:
            The new Media row, or None when the album has no image or
            already has a stored cover.

        Raises:
            AssetArchiveError: If the download or the store write fails.
        """
        if not album.images:
            logger.info("No album cover available for %r", album.name)
            return None

        if await self.has_cover(album_id):
            logger.info("Album cover for %r already exists, skipping", album.name)
            return None

        image = album.images[0]
        logger.info(
            "Downloading album cover for %r: %sx%s", album.name, image.width, image.height
        )

        try:
            response = await self.http_client.get(image.url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise AssetArchiveError(
                f"Cover download failed for album {album.name!r}: {e}", source_url=image.url
            ) from e

        data = response.content
        content_type = response.headers.get("content-type", "image/jpeg")
        filename = f"{uuid.uuid4().hex}.{get_image_extension(content_type)}"
        key = f"{COVER_KEY_PREFIX}/{filename}"

        try:
            url = await self.store.put(self.container, key, data, content_type)
        except (OSError, ValueError) as e:
            raise AssetArchiveError(
                f"Cover store write failed for album {album.name!r}: {e}", source_url=image.url
            ) from e

        media = Media(
            album_id=album_id,
            type=ALBUM_COVER,
            filename=filename,
            storage_key=key,
            url=url,
            source_url=image.url,
            width=image.width,
            height=image.height,
            file_size=len(data),
            mime_type=content_type,
        )
        self.session.add(media)
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.warning("Orphaned cover left in %s: %s", self.container, key)
            raise AssetArchiveError(
                f"Cover record failed for album {album.name!r}: {e}", source_url=image.url
            ) from e

        logger.info("Album cover stored: %s", url)
        return media
