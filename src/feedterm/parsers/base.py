"""Abstract feed parser interface using Protocol."""

from typing import Protocol

from feedterm.models.feed import RawFeed


class FeedParser(Protocol):
    """Feed document parser abstraction protocol."""

    def parse(self, raw_content: bytes | str, url: str | None = None) -> RawFeed:
        """Decode a raw document into a RawFeed.

        Args:
            raw_content: Raw XML from the feed source.
            url: URL the document was fetched from.

        Returns:
            The decoded feed.

        Raises:
            DecodeError: When the document is malformed.
        """
        ...
