"""Abstract feed source interface using Protocol."""

from typing import Protocol


class FeedSource(Protocol):
    """Feed source abstraction protocol."""

    @property
    def url(self) -> str:
        """URL identifying this feed source."""
        ...

    async def fetch_raw(self) -> bytes:
        """Fetch the raw feed document.

        Returns:
            bytes: Undecoded response body.

        Raises:
            FetchError: When the network request fails.
        """
        ...
