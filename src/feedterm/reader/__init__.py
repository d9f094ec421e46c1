"""Article reader package."""

from feedterm.reader.extractor import ArticleExtractor
from feedterm.reader.wrap import wrap_lines

__all__ = [
    "ArticleExtractor",
    "wrap_lines",
]
