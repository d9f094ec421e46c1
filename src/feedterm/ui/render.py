"""Static report rendering: one tab-separated line per item."""

from collections.abc import Callable, Sequence
from typing import TextIO

from feedterm.models.item import Colour, FeedItem
from feedterm.pipeline.display import DisplayMode, DisplayOption, apply_options

OUTPUT_DATE_FORMAT = "%Y/%m/%d"

Colourizer = Callable[[str, Colour], str]


def colourize(text: str, colour: Colour) -> str:
    """Wrap text in ANSI colour escapes."""
    return f"{colour.value}{text}{Colour.RESET.value}"


def plain(text: str, colour: Colour) -> str:
    return text


def format_item(
    item: FeedItem,
    include_links: bool = True,
    colourizer: Colourizer = plain,
) -> str:
    """Format an item as a report line.

    ``<date>:\\t<title>\\t<link>...``; the date column is omitted for undated
    items (including title cards and separators).
    """
    parts = []
    if item.publish_time is not None:
        date = item.publish_time.strftime(OUTPUT_DATE_FORMAT)
        parts.append(f"{colourizer(date, Colour.YELLOW)}:")

    title = item.title
    if item.is_title_card:
        title = colourizer(title, Colour.GREEN)
    elif item.colour is not None:
        title = colourizer(title, item.colour)
    parts.append(f"\t{title}")

    if include_links:
        for link in item.links:
            parts.append(f"\t{colourizer(link, Colour.BLUE)}")
    parts.append("\n")
    return "".join(parts)


def display(
    out: TextIO,
    items: Sequence[FeedItem],
    mode: DisplayMode,
    options: Sequence[DisplayOption] = (),
    colour: bool = False,
) -> int:
    """Write items to ``out`` in display-mode order.

    Args:
        out: Output sink.
        items: Filtered items.
        mode: Display mode to order (and group) them.
        options: Per-item display options, applied after the mode.
        colour: Emit ANSI colours.

    Returns:
        Number of lines written.
    """
    colourizer = colourize if colour else plain
    lines = apply_options(mode(items), options)
    for item in lines:
        out.write(format_item(item, include_links=True, colourizer=colourizer))
    return len(lines)
