"""Best-effort publish date parsing.

Feeds in the wild use a handful of RFC-822 descendants plus ISO-8601 for Atom.
Formats are tried in order and the first match wins.
"""

import re
from datetime import datetime, timedelta, timezone

from feedterm.exceptions import DateParseError

DATE_FORMATS = [
    "%a, %d %b %Y %H:%M:%S %z",  # RFC-1123 with numeric zone
    "%d %b %Y %H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S%z",  # RFC-3339 / Atom
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S",  # zoneless, read as UTC
]

# Named zones seen in RSS feeds; anything else is read as UTC.
ZONE_OFFSETS = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

MONTHS = {
    name: number
    for number, name in enumerate(
        ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"],
        start=1,
    )
}

_LEGACY_PATTERN = re.compile(
    r"^(?:[A-Za-z]{3},\s*)?"
    r"(?P<day>\d{1,2})\s+(?P<month>[A-Za-z]{3})\s+(?P<year>\d{4})\s+"
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?\s+"
    r"(?P<zone>[A-Za-z]+)$"
)


def _parse_legacy(raw_date: str) -> datetime:
    """Parse RFC-1123 dates carrying a zone abbreviation, e.g. ``Mon, 2 Jan 2006 15:04:05 MST``."""
    match = _LEGACY_PATTERN.match(raw_date)
    if not match:
        raise ValueError(f"no legacy match for {raw_date!r}")

    month = MONTHS.get(match["month"].lower())
    if month is None:
        raise ValueError(f"unknown month {match['month']!r}")

    offset = ZONE_OFFSETS.get(match["zone"].upper(), 0)
    return datetime(
        int(match["year"]),
        month,
        int(match["day"]),
        int(match["hour"]),
        int(match["minute"]),
        int(match["second"] or 0),
        tzinfo=timezone(timedelta(hours=offset)),
    )


def parse_date(raw_date: str, default: datetime) -> datetime:
    """Parse a feed publish date.

    Args:
        raw_date: Date string from the feed document.
        default: Returned unchanged when ``raw_date`` is empty.

    Returns:
        A timezone-aware datetime.

    Raises:
        DateParseError: When no known format matches.
    """
    raw_date = raw_date.strip()
    if not raw_date:
        return default

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(raw_date, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    try:
        return _parse_legacy(raw_date)
    except ValueError as e:
        raise DateParseError(raw_date) from e


class DateParser:
    """Date parser bound to one default timestamp.

    The unpacker builds one per feed so every undated item of a feed shares
    the same "now".
    """

    def __init__(self, default: datetime | None = None):
        self._default = default or datetime.now(timezone.utc)

    def __call__(self, raw_date: str) -> datetime:
        return parse_date(raw_date, self._default)
