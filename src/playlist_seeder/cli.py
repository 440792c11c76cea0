"""Command line entry point."""

import argparse
import asyncio
import json
import logging
import sys

from playlist_seeder import __version__
from playlist_seeder.config import ConfigurationError, get_settings
from playlist_seeder.database import init_db
from playlist_seeder.runner import run_check, run_cover_backfill, run_import
from playlist_seeder.services.base import AuthenticationError
from playlist_seeder.services.errors import ImportAbortedError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playlist-seeder",
        description="Import a Spotify playlist into the local music catalog.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Import a playlist")
    import_parser.add_argument(
        "playlist_id", nargs="?", default=None, help="Spotify playlist ID (default: from settings)"
    )
    import_parser.add_argument(
        "--json", action="store_true", help="Print the summary as JSON when done"
    )

    subparsers.add_parser("covers", help="Archive covers for stored albums without one")
    subparsers.add_parser("check", help="Check configuration and database")
    return parser


async def _run(args: argparse.Namespace) -> int:
    await init_db()

    if args.command == "check":
        report = await run_check()
        report.log()
        return 0 if report.ready else 1

    if args.command == "covers":
        await run_cover_backfill()
        return 0

    summary = await run_import(args.playlist_id)
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    settings = get_settings()
    for warning in settings.validate_runtime_config():
        logger.warning("  - %s", warning)

    try:
        return asyncio.run(_run(args))
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1
    except (ImportAbortedError, AuthenticationError) as e:
        logger.error("Run failed: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
