"""Normalized feed item model shared by the pipeline and the renderers."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Colour(str, Enum):
    """Display colours, valued by their ANSI escape codes.

    Not supported on Windows consoles.
    """

    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    PURPLE = "\033[35m"
    CYAN = "\033[36m"
    GRAY = "\033[37m"
    WHITE = "\033[97m"


class FeedItem(BaseModel):
    """A single normalized entry, ready for filtering and display.

    An item with no links but a title is a title card for a feed; an item with
    neither is a blank separator. Neither is a selectable article.
    """

    title: str = ""
    publish_time: datetime | None = Field(
        default=None,
        description="Publication time; None when the source gave no usable date",
    )
    links: list[str] = Field(
        default_factory=list,
        description="Canonical article link first, then secondary links such as comments",
    )
    feed: str = Field(default="", description="Title of the originating feed")
    channel: str = Field(default="", description="Channel the item counts against for caps")

    # Display hint set by display options
    colour: Colour | None = Field(default=None)

    model_config = {"frozen": True}

    @property
    def link(self) -> str:
        """Canonical article link, or an empty string for cards and separators."""
        return self.links[0] if self.links else ""

    @property
    def is_title_card(self) -> bool:
        return not self.links and bool(self.title)

    @property
    def is_selectable(self) -> bool:
        return bool(self.link)
