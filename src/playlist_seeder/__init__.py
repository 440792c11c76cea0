"""Idempotent Spotify playlist importer for a local music catalog."""

__version__ = "0.1.0"
