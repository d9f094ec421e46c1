"""Abstract storage interface using Protocol.

Defines the contract for feed archive implementations.
"""

from pathlib import Path
from typing import Protocol

from feedterm.models.feed import RawFeed


class FeedStorage(Protocol):
    """Feed archive abstraction protocol."""

    def store(self, feed: RawFeed) -> Path:
        """Persist a feed, merging with any stored copy of the same channel.

        Args:
            feed: The freshly fetched feed.

        Returns:
            Path: Where the merged document was written.
        """
        ...

    def load(self, path: Path) -> RawFeed:
        """Load one stored feed.

        Args:
            path: The stored document.

        Returns:
            The decoded feed.
        """
        ...

    def load_all(self) -> list[RawFeed]:
        """Load every stored feed.

        Returns:
            List of feeds, in file name order.
        """
        ...
