"""Terminal feed reader: concurrent fetch, filter pipeline and two-pane browser."""

__version__ = "0.1.0"
