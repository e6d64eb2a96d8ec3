"""Editor draft schemas."""

from datetime import datetime

from pydantic import Field

from shiori.schemas.base import CamelModel


class Draft(CamelModel):
    """In-progress post kept by the editor's autosave."""

    title: str = Field("", max_length=255)
    slug: str = Field("", max_length=255)
    excerpt: str = ""
    content: str = ""
    category: str = Field("", max_length=100)
    image_url: str = ""
    saved_at: datetime | None = None
