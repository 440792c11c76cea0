"""Import pipeline services and external API clients."""

from playlist_seeder.services.archiver import AssetArchiver
from playlist_seeder.services.auth import TokenProvider
from playlist_seeder.services.base import (
    APIError,
    AuthenticationError,
    BaseAPIClient,
    NotFoundError,
    RateLimitError,
    TransientFetchError,
)
from playlist_seeder.services.errors import (
    AssetArchiveError,
    ImportAbortedError,
    InvalidRecordError,
)
from playlist_seeder.services.importer import ImportState, ImportSummary, PlaylistImporter
from playlist_seeder.services.linker import RelationLinker
from playlist_seeder.services.pagination import PagedFetcher
from playlist_seeder.services.spotify import SpotifyClient
from playlist_seeder.services.storage import ContentStore, LocalContentStore
from playlist_seeder.services.upserter import EntityUpserter

__all__ = [
    "APIError",
    "AssetArchiveError",
    "AssetArchiver",
    "AuthenticationError",
    "BaseAPIClient",
    "ContentStore",
    "EntityUpserter",
    "ImportAbortedError",
    "ImportState",
    "ImportSummary",
    "InvalidRecordError",
    "LocalContentStore",
    "NotFoundError",
    "PagedFetcher",
    "PlaylistImporter",
    "RateLimitError",
    "RelationLinker",
    "SpotifyClient",
    "TokenProvider",
    "TransientFetchError",
]
