"""HTTP client utilities.

Provides configured HTTP client with sensible defaults.
"""

import httpx

from feedterm.config.settings import settings


def create_http_client(
    timeout: int | None = None,
    user_agent: str | None = None,
    follow_redirects: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Args:
        timeout: Request timeout in seconds. Defaults to ``settings.fetch_timeout``.
        user_agent: User-Agent header value. Defaults to ``settings.user_agent``.
        follow_redirects: Whether to follow redirects.
        transport: Optional transport override (tests pass ``httpx.MockTransport``).

    Returns:
        Configured httpx.AsyncClient.
    """
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else settings.fetch_timeout,
        headers={"User-Agent": user_agent or settings.user_agent},
        follow_redirects=follow_redirects,
        transport=transport,
    )
