"""HTTP feed source implementation."""

import httpx

from feedterm.exceptions import FetchError


class HttpFeedSource:
    """Feed source fetched with a plain GET.

    The client is owned by the caller so that every source of a refresh shares
    one connection pool.
    """

    def __init__(self, url: str, client: httpx.AsyncClient):
        """Initialize the feed source.

        Args:
            url: Feed URL (e.g., https://hnrss.org/frontpage).
            client: Shared async HTTP client.
        """
        self._url = url
        self._client = client

    @property
    def url(self) -> str:
        """Feed URL."""
        return self._url

    async def fetch_raw(self) -> bytes:
        """Fetch the raw feed document.

        Returns:
            Response body bytes, left undecoded so the feed parser can honour
            the document's own encoding declaration.

        Raises:
            FetchError: When the request fails or returns a non-2xx status.
        """
        try:
            response = await self._client.get(self._url)
            response.raise_for_status()
            return response.content
        except httpx.TimeoutException as e:
            raise FetchError(self._url, f"Request timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            raise FetchError(self._url, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise FetchError(self._url, f"Request failed: {e}") from e
