"""Item pipeline: normalization, filters and display modes."""

from feedterm.pipeline.dates import DateParser, parse_date
from feedterm.pipeline.display import (
    DISPLAY_MODES,
    DisplayMode,
    DisplayOption,
    apply_options,
    colour_after,
    grouped,
    reverse_chronological,
)
from feedterm.pipeline.filters import (
    Deduplicate,
    Filter,
    Filters,
    MaxItems,
    MaxItemsPerChannel,
    OldestItem,
)
from feedterm.pipeline.links import LinkFormatter
from feedterm.pipeline.unpack import unpack_feed

__all__ = [
    "DISPLAY_MODES",
    "DateParser",
    "Deduplicate",
    "DisplayMode",
    "DisplayOption",
    "Filter",
    "Filters",
    "LinkFormatter",
    "MaxItems",
    "MaxItemsPerChannel",
    "OldestItem",
    "apply_options",
    "colour_after",
    "grouped",
    "parse_date",
    "reverse_chronological",
    "unpack_feed",
]
