"""Comment listing, creation and deletion."""

import logging

from sqlalchemy.orm import Session

from shiori.errors import (
    Forbidden,
    InvalidInput,
    InvalidRelationship,
    NestingLimitExceeded,
    NotFound,
    ProfileError,
    Unauthorized,
)
from shiori.models.comment import Comment
from shiori.models.post import Post
from shiori.models.user import User
from shiori.schemas.comment import CommentAuthor, CommentNode, CommentWithAuthor
from shiori.services.auth import get_or_create_user, get_user_by_email
from shiori.services.authorization import SessionIdentity, can_delete_comment
from shiori.services.comment_tree import build_comment_tree
from shiori.services.validation import parse_id, validate_comment_content

logger = logging.getLogger(__name__)

# Roots plus one level of replies
MAX_THREAD_DEPTH = 2


class CommentService:
    """Service for threaded post comments."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_post(self, post_id: int) -> list[CommentWithAuthor]:
        """Flat comments for a post, oldest first, with author summaries."""
        rows = (
            self.db.query(Comment, User.name, User.image)
            .join(User, Comment.user_id == User.id)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )
        return [
            CommentWithAuthor(
                id=comment.id,
                parent_id=comment.parent_id,
                user_id=comment.user_id,
                content=comment.content,
                created_at=comment.created_at,
                user=CommentAuthor(name=name, image=image),
            )
            for comment, name, image in rows
        ]

    def thread_for_post(self, post_id: int) -> list[CommentNode]:
        """Comments for a post nested as roots with their direct replies."""
        return build_comment_tree(self.list_for_post(post_id), max_depth=MAX_THREAD_DEPTH)

    def create_comment(
        self,
        identity: SessionIdentity | None,
        post_id: int | str | None,
        content: str | None,
        parent_id: int | str | None = None,
    ) -> Comment:
        """Add a comment or a reply to a root comment.

        Checks run in order and the first failure aborts: session, content
        and ids, post, parent comment, then the acting user record.
        """
        if identity is None:
            raise Unauthorized()

        validation = validate_comment_content(content)
        parsed_post_id = parse_id(post_id)
        if not validation.is_valid or parsed_post_id is None:
            raise InvalidInput(validation.message or "Invalid input")

        parsed_parent_id = None
        if parent_id not in (None, "", 0):
            parsed_parent_id = parse_id(parent_id)
            if parsed_parent_id is None:
                raise InvalidInput("Invalid parentId")

        post = self.db.query(Post).filter(Post.id == parsed_post_id).first()
        if post is None:
            raise NotFound("Post not found")

        if parsed_parent_id is not None:
            parent = self.db.query(Comment).filter(Comment.id == parsed_parent_id).first()
            if parent is None:
                raise NotFound("Parent comment not found")
            if parent.post_id != post.id:
                raise InvalidRelationship()
            if parent.parent_id is not None:
                raise NestingLimitExceeded()

        user = get_or_create_user(self.db, identity)
        if user is None:
            raise ProfileError()

        comment = Comment(
            post_id=post.id,
            parent_id=parsed_parent_id,
            user_id=user.id,
            content=content,
        )
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        logger.info(f"User {user.id} commented {comment.id} on post {post.id}")
        return comment

    def delete_comment(
        self, identity: SessionIdentity | None, comment_id: int | str | None
    ) -> None:
        """Delete a comment and its replies (author or admin only)."""
        if identity is None:
            raise Unauthorized()

        parsed_id = parse_id(comment_id)
        if parsed_id is None:
            raise InvalidInput("Invalid comment id")

        comment = self.db.query(Comment).filter(Comment.id == parsed_id).first()
        if comment is None:
            raise NotFound("Comment not found")

        user = get_user_by_email(self.db, identity.email)
        if not can_delete_comment(identity, comment, user):
            raise Forbidden("You can only delete your own comments")

        post_id = comment.post_id
        self.db.delete(comment)
        self.db.commit()
        logger.info(f"Deleted comment {parsed_id} on post {post_id}")
