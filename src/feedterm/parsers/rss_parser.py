"""Feed document parser implementation."""

import feedparser

from feedterm.exceptions import DecodeError
from feedterm.models.feed import RawFeed, RawItem


class RssParser:
    """Parser for syndication documents (RSS 2.0, RSS 1.0 and Atom).

    Keeps every field as the document states it: dates stay strings and links
    are not rewritten. Normalization happens later, in the unpacker.
    """

    def parse(self, raw_content: bytes | str, url: str | None = None) -> RawFeed:
        """Decode a feed document.

        Args:
            raw_content: Raw document body.
            url: URL the document came from. When omitted the document's own
                ``rel="self"`` link is used, as for archived copies.

        Returns:
            The decoded feed.

        Raises:
            DecodeError: When the body is not a usable feed document.
        """
        source = url or "<document>"
        try:
            parsed = feedparser.parse(raw_content)
        except Exception as e:  # noqa: BLE001
            raise DecodeError(source, f"Unexpected parse error: {e}") from e

        if not parsed.entries:
            # feedparser sets bozo=1 for any parse issues
            if parsed.get("bozo"):
                raise DecodeError(source, f"Feed parse error: {parsed.get('bozo_exception')}")
            # An empty body sets neither bozo nor version
            if not parsed.get("version"):
                raise DecodeError(source, "Not a recognised feed format")

        channel = parsed.feed
        return RawFeed(
            url=url or self._self_link(channel),
            title=self._clean_text(channel.get("title", "")),
            link=channel.get("link", ""),
            description=channel.get("subtitle", channel.get("description", "")),
            language=channel.get("language", ""),
            items=tuple(self._parse_entry(entry) for entry in parsed.entries),
        )

    def _parse_entry(self, entry: feedparser.FeedParserDict) -> RawItem:
        """Parse a single feed entry into a RawItem."""
        return RawItem(
            title=self._clean_text(entry.get("title", "")),
            link=entry.get("link", ""),
            # Atom entries may only carry an update time
            pub_date=entry.get("published", entry.get("updated", "")),
            guid=entry.get("id", ""),
            comments=entry.get("comments", ""),
            description=entry.get("summary", ""),
        )

    def _self_link(self, channel: feedparser.FeedParserDict) -> str:
        for link in channel.get("links", []):
            if link.get("rel") == "self" and link.get("href"):
                return link["href"]
        return ""

    def _clean_text(self, text: str) -> str:
        """Collapse the line breaks some feeds put inside titles."""
        return " ".join(text.split())
