"""User model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from shiori.database import Base
from shiori.models.enums import Role
from shiori.models.mixins import CreatedAtMixin


class User(Base, CreatedAtMixin):
    """Blog reader or administrator.

    Social sign-in accounts have no password hash.
    """

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)
    name = Column(String(255), nullable=True)
    image = Column(String, nullable=True)
    role = Column(
        String(20), nullable=False, default=Role.READER.value, server_default=Role.READER.value
    )

    # Relationships
    comments = relationship("Comment", back_populates="user", cascade="all, delete-orphan")
