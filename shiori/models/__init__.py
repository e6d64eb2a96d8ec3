"""SQLAlchemy models."""

from shiori.models.comment import Comment
from shiori.models.post import Post
from shiori.models.user import User

__all__ = [
    "User",
    "Post",
    "Comment",
]
