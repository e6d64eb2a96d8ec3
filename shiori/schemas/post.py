"""Post schemas."""

from datetime import datetime

from pydantic import Field, computed_field

from shiori.models.post import DEFAULT_CATEGORY
from shiori.schemas.base import CamelModel
from shiori.services.content import calculate_reading_time
from shiori.services.images import get_optimized_content_html, get_optimized_image_url


class PostCreate(CamelModel):
    """Create a new post."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    excerpt: str | None = None
    content: str | None = None
    category: str = Field(DEFAULT_CATEGORY, max_length=100)
    image_url: str | None = None
    author: str | None = Field(None, max_length=255)


class PostUpdate(CamelModel):
    """Update a post. Only supplied fields change."""

    title: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    excerpt: str | None = None
    content: str | None = None
    category: str | None = Field(None, max_length=100)
    image_url: str | None = None
    author: str | None = Field(None, max_length=255)


class PostResponse(CamelModel):
    """Post response."""

    id: int
    title: str
    slug: str
    excerpt: str | None
    content: str | None
    image_url: str | None
    category: str
    author: str
    created_at: datetime

    @computed_field
    @property
    def image(self) -> str | None:
        """Cover image sized for cards."""
        return get_optimized_image_url(self.image_url)

    @computed_field(alias="readingTime")
    @property
    def reading_time(self) -> int:
        return calculate_reading_time(self.content or "")


class PostDetail(PostResponse):
    """Single post, with body HTML ready to render."""

    @computed_field(alias="contentHtml")
    @property
    def content_html(self) -> str | None:
        """Content with optimized, lazily loaded images."""
        return get_optimized_content_html(self.content)


class PostPage(CamelModel):
    """One page of the post listing."""

    posts: list[PostResponse]
    total: int
    page: int
    total_pages: int


class SlugCheckResponse(CamelModel):
    exists: bool


class MessageResponse(CamelModel):
    message: str
