"""API routers."""

from playlist_seeder.api.router import api_router

__all__ = ["api_router"]
