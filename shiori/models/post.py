"""Post model."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from shiori.database import Base
from shiori.models.mixins import CreatedAtMixin

DEFAULT_CATEGORY = "Journal"
DEFAULT_AUTHOR = "Shiori"


class Post(Base, CreatedAtMixin):
    """Blog post addressed publicly by its slug."""

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=True)  # rich HTML from the editor
    image_url = Column(String, nullable=True)
    category = Column(
        String(100), nullable=False, default=DEFAULT_CATEGORY, server_default=DEFAULT_CATEGORY
    )
    author = Column(
        String(255), nullable=False, default=DEFAULT_AUTHOR, server_default=DEFAULT_AUTHOR
    )

    # Relationships
    comments = relationship("Comment", back_populates="post", cascade="all, delete-orphan")
