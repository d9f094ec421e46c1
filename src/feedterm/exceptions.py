"""Custom exceptions for feedterm.

Provides a structured exception hierarchy for the feed pipeline. None of these
errors is fatal to a run: callers log them and carry on with partial results.
"""


class FeedtermError(Exception):
    """Base exception class for all feedterm errors."""

    pass


class FetchError(FeedtermError):
    """Raised when fetching a feed over the network fails.

    Attributes:
        url: The feed URL that failed.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to fetch {url}: {message}")


class DecodeError(FeedtermError):
    """Raised when a fetched document cannot be decoded as a feed.

    Attributes:
        url: The feed URL whose body was malformed.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Failed to decode {url}: {message}")


class DateParseError(FeedtermError):
    """Raised when a publish date matches none of the known formats.

    Attributes:
        raw_date: The unparseable date string.
    """

    def __init__(self, raw_date: str):
        self.raw_date = raw_date
        super().__init__(f"Unrecognised date format: {raw_date!r}")


class ExtractionError(FeedtermError):
    """Raised when the full article text cannot be extracted.

    Attributes:
        url: The article link being extracted.
    """

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Could not extract {url}: {message}")


class StorageError(FeedtermError):
    """Raised when reading or writing the feed archive fails."""

    pass
