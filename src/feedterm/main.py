"""Command line entry point.

Subcommands:
    feed     All feeds merged, newest first (``--limit`` caps the total).
    group    Items grouped per feed (``--limit`` caps each feed).
    select   Pick a single feed from the list, newest first.
    edit     Open the feed list in an editor.
    archive  Fetch every feed and merge it into the local archive.

Listing commands open the interactive browser unless ``--static`` is given.
"""

import argparse
import asyncio
import os
import subprocess
import sys
from collections.abc import AsyncIterator, Callable, Sequence
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TextIO

from feedterm.config.settings import settings
from feedterm.exceptions import StorageError
from feedterm.models.feed import RawFeed
from feedterm.pipeline.display import DISPLAY_MODES, DisplayOption, colour_after
from feedterm.pipeline.filters import (
    Deduplicate,
    Filter,
    Filters,
    MaxItems,
    MaxItemsPerChannel,
    OldestItem,
)
from feedterm.services.feed_service import (
    get_feed_items,
    get_urls,
    refresh_feeds,
    refresh_feeds_stream,
)
from feedterm.storage.base import FeedStorage
from feedterm.storage.xml_files import XmlFeedStorage
from feedterm.ui.render import display
from feedterm.utils.logger import configure_logging, get_logger

LIST_COMMANDS = ("feed", "group", "select")

# Which cap each listing command applies with --limit
CAPS: dict[str, Callable[[int], Filter]] = {
    "feed": MaxItems,
    "group": MaxItemsPerChannel,
    "select": MaxItemsPerChannel,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="feedterm", description="Terminal feed reader")
    parser.add_argument(
        "--feeds-file",
        type=Path,
        default=settings.feeds_file,
        help=f"Feed URL list (default: {settings.feeds_file})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for command in LIST_COMMANDS:
        listing = sub.add_parser(command, help=f"Show feeds ({command} view)")
        listing.add_argument(
            "--max",
            type=int,
            default=settings.max_age_hours,
            help="Max age of items (hours)",
        )
        listing.add_argument(
            "--limit",
            type=int,
            default=0,
            help="Max items (per channel for group/select); 0 for no limit",
        )
        listing.add_argument(
            "--highlight",
            type=int,
            default=0,
            help="Highlight items newer than this many hours; 0 to disable",
        )
        listing.add_argument("--static", action="store_true", help="Print a report and exit")
        listing.add_argument(
            "--archive",
            action="store_true",
            help="Read the local archive instead of fetching",
        )

    sub.add_parser("edit", help="Edit the feed list")
    sub.add_parser("archive", help="Fetch feeds and merge them into the local archive")
    return parser


def read_urls(path: Path) -> list[str]:
    with path.open("r", encoding="utf-8") as f:
        return get_urls(f)


def select_single_feed(urls: Sequence[str], stdin: TextIO, stdout: TextIO) -> str:
    """Print the numbered feed list and read a choice until a valid one is given."""
    for i, url in enumerate(urls):
        stdout.write(f"{i}:\t{url}\n")
    stdout.flush()

    while True:
        line = stdin.readline()
        if not line:
            raise EOFError("No feed selected")
        try:
            choice = int(line.strip())
        except ValueError:
            stdout.write(f"Not a number: {line.strip()!r}\n")
            continue
        if 0 <= choice < len(urls):
            return urls[choice]
        stdout.write(f"Choose between 0 and {len(urls) - 1}\n")


def build_filters(command: str, max_hours: int, limit: int) -> Filters:
    """Filter chain for a listing command: age, then duplicates, then the cap."""
    return Filters(
        OldestItem(timedelta(hours=max_hours)),
        Deduplicate(),
        CAPS[command](limit),
    )


def build_options(highlight_hours: int) -> list[DisplayOption]:
    if highlight_hours <= 0:
        return []
    return [colour_after(datetime.now(timezone.utc) - timedelta(hours=highlight_hours))]


async def _archived_stream(feeds: Sequence[RawFeed]) -> AsyncIterator[RawFeed | None]:
    for feed in feeds:
        yield feed


def edit_feeds_file(path: Path) -> int:
    editor = os.environ.get("EDITOR") or settings.editor
    path.parent.mkdir(parents=True, exist_ok=True)
    return subprocess.run([editor, str(path)], check=False).returncode


async def archive_feeds(urls: Sequence[str], storage: FeedStorage) -> dict:
    """Fetch every feed and merge it into the archive.

    Returns:
        dict: Run statistics.
    """
    logger = get_logger("archive")
    stats = {"feeds_requested": len(urls), "feeds_stored": 0, "errors": []}
    for feed in await refresh_feeds(urls):
        if feed is None:
            continue
        try:
            path = storage.store(feed)
        except StorageError as e:
            logger.warning("Feed not archived", url=feed.url, error=str(e))
            stats["errors"].append(feed.url)
            continue
        logger.info("Feed archived", url=feed.url, path=str(path))
        stats["feeds_stored"] += 1
    return stats


def run_listing(args: argparse.Namespace, urls: list[str]) -> int:
    logger = get_logger("cli")
    mode = DISPLAY_MODES["group" if args.command == "group" else "feed"]
    filters = build_filters(args.command, args.max, args.limit)
    options = build_options(args.highlight)
    storage: FeedStorage = XmlFeedStorage(settings.archive_dir)

    if args.command == "select" and not args.archive:
        urls = [select_single_feed(urls, sys.stdin, sys.stdout)]

    if args.static:
        if args.archive:
            feeds: Sequence[RawFeed | None] = storage.load_all()
        else:
            feeds = asyncio.run(refresh_feeds(urls))
        items = get_feed_items(feeds, filters)
        count = display(sys.stdout, items, mode, options, colour=sys.stdout.isatty())
        logger.debug("Report written", lines=count)
        return 0

    # Imported here: curses and the browser engine are only needed interactively
    from feedterm.ui.terminal import run_app

    if args.archive:
        stream = _archived_stream(storage.load_all())
    else:
        stream = refresh_feeds_stream(urls)
    run_app(stream, mode, filters, options)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    interactive = args.command in LIST_COMMANDS and not args.static
    log_file = settings.log_file
    if interactive and log_file is None:
        log_file = Path.home() / ".rss" / "feedterm.log"
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
        log_file=log_file,
    )
    logger = get_logger("cli")

    if args.command == "edit":
        return edit_feeds_file(args.feeds_file)

    try:
        urls = read_urls(args.feeds_file)
    except OSError as e:
        logger.error("Cannot read feed list", path=str(args.feeds_file), error=str(e))
        return 1

    try:
        if args.command == "archive":
            stats = asyncio.run(archive_feeds(urls, XmlFeedStorage(settings.archive_dir)))
            logger.info("Archive completed", **stats)
            return 0
        return run_listing(args, urls)
    except StorageError as e:
        logger.error("Archive unavailable", error=str(e))
        return 1
    except EOFError as e:
        logger.error("Aborted", error=str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
