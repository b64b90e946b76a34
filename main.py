"""CLI entry point for the matrimony directory browser."""

import argparse
import asyncio
import json
import logging
import sqlite3
import sys

from src.core.config import Settings
from src.core.db import init_db
from src.pipeline.browser import DirectoryBrowser
from src.pipeline.favorites import FavoritesRepository
from src.pipeline.matcher import FilterCriteria
from src.pipeline.store import DatasetLoadError, ProfileStore
from src.render.text import LOAD_ERROR, render_details, render_filter_options, render_page
from src.sources.base import DatasetSource
from src.sources.local import LocalDatasetSource
from src.sources.remote import RemoteDatasetSource

logger = logging.getLogger(__name__)


COMMANDS = ("browse", "show", "favorite", "register")


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--source",
        default=None,
        help="Read profiles from a local JSON file instead of the configured URL",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = list(sys.argv[1:] if argv is None else argv)
    # Default to browse when no subcommand given
    if (not argv or argv[0] not in COMMANDS) and not {"-h", "--help"} & set(argv):
        argv = ["browse", *argv]

    parser = argparse.ArgumentParser(
        description="Matrimony directory - search, filter and favorite published profiles",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- browse subcommand (default) ---
    browse_parser = subparsers.add_parser("browse", help="List profiles, one page at a time")
    _add_common(browse_parser)
    browse_parser.add_argument("--search", "-s", default="", help="Free-text search")
    browse_parser.add_argument("--gender", help="Exact gender (e.g. male, female)")
    browse_parser.add_argument("--resident", help="Exact resident status")
    browse_parser.add_argument("--marital", help="Exact marital status")
    browse_parser.add_argument("--subsect", help="Exact subsect / sakha")
    browse_parser.add_argument(
        "--favorites-only",
        action="store_true",
        help="Show only profiles marked as favorite",
    )
    browse_parser.add_argument("--page", "-p", type=int, default=1, help="Page number (default: 1)")
    browse_parser.add_argument(
        "--list-filters",
        action="store_true",
        help="List the values accepted by --gender, --resident, --marital and --subsect",
    )
    browse_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export the filtered profiles instead of printing cards",
    )

    # --- show subcommand ---
    show_parser = subparsers.add_parser("show", help="Show full details for one profile")
    _add_common(show_parser)
    show_parser.add_argument("index", type=int, help="Profile position as shown in brackets")

    # --- favorite subcommand ---
    fav_parser = subparsers.add_parser("favorite", help="Toggle a profile's favorite mark")
    _add_common(fav_parser)
    fav_parser.add_argument("index", type=int, help="Profile position as shown in brackets")

    # --- register subcommand ---
    register_parser = subparsers.add_parser("register", help="Print the registration form link")
    _add_common(register_parser)

    return parser.parse_args(argv)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def open_favorites(settings: Settings) -> tuple[FavoritesRepository, sqlite3.Connection | None]:
    """Open local favorites storage; an unusable store degrades to no favorites."""
    try:
        conn: sqlite3.Connection | None = init_db(settings.favorites.path)
    except (sqlite3.Error, OSError) as e:
        logger.warning("Favorites storage unavailable at %s: %s", settings.favorites.path, e)
        conn = None
    return FavoritesRepository(conn, settings.favorites.storage_key), conn


def build_source(settings: Settings, source_path: str | None) -> DatasetSource:
    if source_path:
        return LocalDatasetSource(source_path)
    return RemoteDatasetSource(settings.dataset)


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    return FilterCriteria(
        search=args.search or "",
        gender=args.gender,
        resident_status=args.resident,
        marital_status=args.marital,
        subsect=args.subsect,
        favorites_only=args.favorites_only,
    )


def export_profiles_json(browser: DirectoryBrowser) -> str:
    """Export the current filtered set (all pages) as a JSON string."""
    data = [{"index": e.index, **e.profile.model_dump()} for e in browser.filtered]
    return json.dumps(data, indent=2, ensure_ascii=False)


async def run(settings: Settings, args: argparse.Namespace) -> int:
    """Load the dataset and execute one browse/show/favorite command."""
    favorites, conn = open_favorites(settings)
    try:
        store = ProfileStore(
            build_source(settings, args.source),
            favorites,
            tz=settings.display.tzinfo(),
        )
        browser = DirectoryBrowser.from_settings(store, settings)
        try:
            await browser.load()
        except DatasetLoadError as e:
            print(f"Error loading profiles: {e}", file=sys.stderr)
            print(LOAD_ERROR)
            return 1

        if args.command == "show":
            return _cmd_show(browser, args.index)
        if args.command == "favorite":
            return _cmd_favorite(browser, args.index)
        return _cmd_browse(browser, args)
    finally:
        if conn is not None:
            conn.close()


def _cmd_browse(browser: DirectoryBrowser, args: argparse.Namespace) -> int:
    if args.list_filters:
        print(render_filter_options(browser.store.filter_options()))
        return 0
    browser.apply_filters(criteria_from_args(args))
    if args.export == "json":
        print(export_profiles_json(browser))
        return 0
    if args.page != browser.page and not browser.go_to_page(args.page):
        print(
            f"Error: page {args.page} is out of range (1-{browser.total_pages})",
            file=sys.stderr,
        )
        return 1
    print(render_page(browser.current_view()))
    return 0


def _cmd_show(browser: DirectoryBrowser, index: int) -> int:
    entries = browser.store.indexed()
    if not 0 <= index < len(entries):
        print(f"Error: no profile at position {index}", file=sys.stderr)
        return 1
    print(render_details(entries[index]))
    return 0


def _cmd_favorite(browser: DirectoryBrowser, index: int) -> int:
    try:
        profile = browser.toggle_favorite(index)
    except IndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    state = "added to" if profile.favorite else "removed from"
    print(f"{profile.full_name or f'Profile {index}'} {state} favorites")
    return 0


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "register":
        print(f"Register your profile: {settings.dataset.form_url}")
        return

    sys.exit(asyncio.run(run(settings, args)))


if __name__ == "__main__":
    main()
