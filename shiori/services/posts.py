"""Post listing and management."""

import logging
import math

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shiori.errors import Conflict, InvalidInput, NotFound
from shiori.models.post import Post
from shiori.schemas.post import PostCreate, PostPage, PostResponse, PostUpdate
from shiori.services.authorization import SessionIdentity, require_admin
from shiori.services.validation import MAX_ID, parse_id

logger = logging.getLogger(__name__)

FALLBACK_AUTHOR = "Admin"
MAX_PAGE_SIZE = 100


class PostService:
    """Service for post queries and admin-only mutations."""

    def __init__(self, db: Session):
        self.db = db

    def list_posts(
        self,
        search: str | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int = 9,
    ) -> PostPage:
        """List posts newest first, filtered by search text and category.

        Search is a case-insensitive substring match on title, excerpt or
        content. Both filters apply together when given.
        """
        if limit < 1:
            raise InvalidInput("limit must be at least 1")
        if limit > MAX_PAGE_SIZE:
            raise InvalidInput(f"limit must be at most {MAX_PAGE_SIZE}")
        page = max(page, 1)
        offset = (page - 1) * limit
        if offset > MAX_ID:
            raise InvalidInput("page is out of range")

        conditions = []
        if search:
            pattern = f"%{search}%"
            conditions.append(
                or_(
                    Post.title.ilike(pattern),
                    Post.excerpt.ilike(pattern),
                    Post.content.ilike(pattern),
                )
            )
        if category:
            conditions.append(Post.category == category)
        where_clause = and_(*conditions) if conditions else None

        query = self.db.query(Post)
        count_query = self.db.query(func.count(Post.id))
        if where_clause is not None:
            query = query.filter(where_clause)
            count_query = count_query.filter(where_clause)

        posts = (
            query.order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        total = count_query.scalar() or 0

        return PostPage(
            posts=[PostResponse.model_validate(post) for post in posts],
            total=total,
            page=page,
            total_pages=math.ceil(total / limit),
        )

    def find_post(self, slug_or_id: str) -> Post | None:
        """Find a post by slug, falling back to its numeric id."""
        post = self.db.query(Post).filter(Post.slug == slug_or_id).first()
        if post is None:
            post_id = parse_id(slug_or_id)
            if post_id is not None:
                post = self.db.query(Post).filter(Post.id == post_id).first()
        return post

    def get_post(self, slug_or_id: str) -> Post:
        post = self.find_post(slug_or_id)
        if post is None:
            raise NotFound("Post not found")
        return post

    def slug_exists(self, slug: str | None) -> bool:
        if not slug:
            return False
        return self.db.query(Post.id).filter(Post.slug == slug).first() is not None

    def create_post(self, identity: SessionIdentity | None, data: PostCreate) -> Post:
        """Create a post (admin only)."""
        admin_user = require_admin(self.db, identity)

        author = data.author or (admin_user.name if admin_user else None) or FALLBACK_AUTHOR
        post = Post(
            title=data.title,
            slug=data.slug,
            excerpt=data.excerpt,
            content=data.content,
            category=data.category,
            image_url=data.image_url,
            author=author,
        )
        self.db.add(post)
        self._commit_unique_slug(data.slug)
        self.db.refresh(post)
        logger.info(f"Created post {post.id} ({post.slug})")
        return post

    def update_post(
        self, identity: SessionIdentity | None, slug_or_id: str, data: PostUpdate
    ) -> Post:
        """Update the supplied fields of a post (admin only)."""
        require_admin(self.db, identity)
        post = self.get_post(slug_or_id)

        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("title", "slug", "category", "author"):
                continue
            setattr(post, field, value)

        self._commit_unique_slug(post.slug)
        self.db.refresh(post)
        logger.info(f"Updated post {post.id} ({post.slug})")
        return post

    def delete_post(self, identity: SessionIdentity | None, slug_or_id: str) -> None:
        """Delete a post and, through cascade, its comments (admin only)."""
        require_admin(self.db, identity)
        post = self.get_post(slug_or_id)
        post_id = post.id
        self.db.delete(post)
        self.db.commit()
        logger.info(f"Deleted post {post_id}")

    def _commit_unique_slug(self, slug: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Rejected post write for slug '{slug}': {e.orig}")
            raise Conflict("Slug is already in use") from e
