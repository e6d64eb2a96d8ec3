"""Comment schemas."""

from datetime import datetime

from pydantic import Field

from shiori.schemas.base import CamelModel


class CommentCreate(CamelModel):
    """New comment or reply.

    Identifiers are accepted as strings or numbers and parsed by the
    comment service so that bad values surface as ``InvalidInput``.
    """

    post_id: int | str | None = None
    content: str = ""
    parent_id: int | str | None = None


class CommentRecord(CamelModel):
    """Stored comment row as returned after insertion."""

    id: int
    post_id: int
    parent_id: int | None
    user_id: str
    content: str
    created_at: datetime


class CommentAuthor(CamelModel):
    name: str | None
    image: str | None


class CommentWithAuthor(CamelModel):
    """Flat comment listing entry with an embedded author summary."""

    id: int
    parent_id: int | None
    user_id: str
    content: str
    created_at: datetime
    user: CommentAuthor


class CommentNode(CommentWithAuthor):
    """Comment with its direct replies nested."""

    replies: list["CommentNode"] = Field(default_factory=list)
