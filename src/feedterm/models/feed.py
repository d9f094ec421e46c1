"""Raw feed document models, as decoded from the source XML."""

from pydantic import BaseModel, Field


class RawItem(BaseModel):
    """One entry exactly as the feed document describes it."""

    title: str = ""
    link: str = ""
    pub_date: str = Field(default="", description="Publish date string, unparsed")
    guid: str = ""
    # Link to a dedicated comments page, e.g. Hacker News
    comments: str = ""
    description: str = ""

    model_config = {"frozen": True}

    @property
    def merge_key(self) -> str:
        """Identity used when merging stored and fetched copies of a feed."""
        return self.title + self.pub_date


class RawFeed(BaseModel):
    """A fetched and decoded feed document.

    Frozen: once decoded it is only read, and merging builds a new instance.
    """

    url: str = Field(..., description="URL the document was fetched from")
    title: str = Field(default="", description="Channel title")
    link: str = Field(default="", description="Channel home page")
    description: str = ""
    language: str = ""
    items: tuple[RawItem, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}
