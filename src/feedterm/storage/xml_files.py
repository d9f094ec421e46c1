"""File-per-channel feed archive.

Each channel is stored as an RSS 2.0 document named after the channel title,
so archived copies decode through the same parser as live fetches.
"""

import re
import xml.etree.ElementTree as ET
from pathlib import Path

import structlog

from feedterm.exceptions import DecodeError, StorageError
from feedterm.models.feed import RawFeed, RawItem
from feedterm.parsers.base import FeedParser
from feedterm.parsers.rss_parser import RssParser

logger = structlog.get_logger()

ATOM_NS = "http://www.w3.org/2005/Atom"

ET.register_namespace("atom", ATOM_NS)


def merge(existing: RawFeed, incoming: RawFeed) -> RawFeed:
    """Append incoming items not already stored.

    Items are identified by title plus publish date. Order is kept: stored
    items first, then new ones as the incoming feed lists them.
    """
    seen = {item.merge_key for item in existing.items}
    appended: list[RawItem] = []
    for item in incoming.items:
        if item.merge_key in seen:
            continue
        seen.add(item.merge_key)
        appended.append(item)

    return existing.model_copy(
        update={
            "url": existing.url or incoming.url,
            "items": existing.items + tuple(appended),
        }
    )


def to_xml(feed: RawFeed) -> bytes:
    """Serialize a feed as an RSS 2.0 document."""
    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")

    for tag, value in (
        ("title", feed.title),
        ("link", feed.link),
        ("description", feed.description),
        ("language", feed.language),
    ):
        ET.SubElement(channel, tag).text = value
    if feed.url:
        ET.SubElement(channel, f"{{{ATOM_NS}}}link", {"href": feed.url, "rel": "self"})

    for item in feed.items:
        element = ET.SubElement(channel, "item")
        for tag, value in (
            ("title", item.title),
            ("link", item.link),
            ("pubDate", item.pub_date),
            ("guid", item.guid),
            ("comments", item.comments),
            ("description", item.description),
        ):
            if value:
                ET.SubElement(element, tag).text = value
        if item.guid:
            element.find("guid").set("isPermaLink", "false")

    return ET.tostring(rss, encoding="utf-8", xml_declaration=True)


class XmlFeedStorage:
    """Stores feeds as RSS documents in a folder."""

    def __init__(self, folder: Path, parser: FeedParser | None = None):
        """Initialize the archive.

        Args:
            folder: Directory holding one file per channel.
            parser: Parser for stored documents. Defaults to RssParser.
        """
        self._folder = folder
        self._parser = parser or RssParser()

    def path_for(self, feed: RawFeed) -> Path:
        """Archive path of a feed, derived from its channel title."""
        name = re.sub(r"[/\\\x00]", "_", feed.title).strip()
        if not name.strip("."):
            # Empty, "." and ".." would name the folder or its parent
            name = "untitled"
        return self._folder / name

    def store(self, feed: RawFeed) -> Path:
        """Write a feed, merging it into the stored copy if one exists.

        Raises:
            StorageError: When the stored copy is unreadable or the write fails.
        """
        path = self.path_for(feed)
        if path.exists():
            feed = merge(self.load(path), feed)

        try:
            self._folder.mkdir(parents=True, exist_ok=True)
            path.write_bytes(to_xml(feed))
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

        logger.debug("Feed stored", path=str(path), item_count=len(feed.items))
        return path

    def load(self, path: Path) -> RawFeed:
        """Load a stored feed.

        Raises:
            StorageError: When the file cannot be read or decoded.
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

        try:
            return self._parser.parse(content)
        except DecodeError as e:
            raise StorageError(f"Corrupt archive file {path}: {e}") from e

    def load_all(self) -> list[RawFeed]:
        """Load every stored feed, in file name order.

        Raises:
            StorageError: When the folder or any file in it cannot be read.
        """
        try:
            paths = sorted(p for p in self._folder.iterdir() if p.is_file())
        except OSError as e:
            raise StorageError(f"Cannot list {self._folder}: {e}") from e
        return [self.load(path) for path in paths]
