"""Content store for downloaded assets."""

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)


class ContentStore(ABC):
    """Put-by-key byte sink organised in containers."""

    @abstractmethod
    async def exists(self, container: str) -> bool:
        """Return True if the container exists."""
        ...

    @abstractmethod
    async def create(self, container: str) -> None:
        """Create the container."""
        ...

    @abstractmethod
    async def put(self, container: str, key: str, data: bytes, content_type: str) -> str:
        """Store `data` under `key` and return a URL it can be retrieved from."""
        ...

    async def ensure_container(self, container: str) -> bool:
        """Create the container if absent. Returns True if it was created."""
        if await self.exists(container):
            logger.info("Content container %r already exists", container)
            return False
        await self.create(container)
        logger.info("Created content container %r", container)
        return True


class LocalContentStore(ContentStore):
    """Stores objects as files below a root directory, one subdirectory per container."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _container_path(self, container: str) -> Path:
        return self.root / self._safe_key(container)

    @staticmethod
    def _safe_key(key: str) -> str:
        path = PurePosixPath(key)
        if path.is_absolute() or ".." in path.parts or not path.parts:
            raise ValueError(f"Invalid storage key: {key!r}")
        return str(path)

    async def exists(self, container: str) -> bool:
        return await asyncio.to_thread(self._container_path(container).is_dir)

    async def create(self, container: str) -> None:
        await asyncio.to_thread(self._container_path(container).mkdir, parents=True, exist_ok=True)

    async def put(self, container: str, key: str, data: bytes, content_type: str) -> str:
        safe_key = self._safe_key(key)
        full_path = self._container_path(container) / safe_key
        await asyncio.to_thread(full_path.parent.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(full_path.write_bytes, data)
        logger.debug("Stored %d bytes (%s) at %s", len(data), content_type, full_path)
        return f"{self.base_url}/{self._safe_key(container)}/{safe_key}"
