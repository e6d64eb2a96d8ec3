"""Tests for admin and comment-ownership checks."""

import pytest

from shiori.config import get_settings
from shiori.errors import Forbidden, Unauthorized
from shiori.models import Comment, Post, User
from shiori.services.authorization import (
    SessionIdentity,
    can_delete_comment,
    is_admin,
    require_admin,
)

OWNER = get_settings().admin_email


class TestIsAdmin:
    """Tests for is_admin."""

    def test_admin_role(self):
        assert is_admin("someone@example.com", OWNER, "admin") is True

    def test_owner_email_regardless_of_role(self):
        assert is_admin(OWNER, OWNER, "reader") is True
        assert is_admin(OWNER, OWNER, None) is True

    def test_neither_grant(self):
        assert is_admin("someone@example.com", OWNER, "reader") is False
        assert is_admin("someone@example.com", OWNER, None) is False

    def test_unconfigured_owner_email_grants_nothing(self):
        assert is_admin("someone@example.com", None, "reader") is False
        assert is_admin("", "", None) is False


class TestRequireAdmin:
    """Tests for require_admin."""

    def test_no_session_is_unauthorized(self, db):
        with pytest.raises(Unauthorized):
            require_admin(db, None)

    def test_reader_is_forbidden(self, db):
        db.add(User(id="r1", email="reader@example.com", role="reader"))
        db.commit()
        with pytest.raises(Forbidden):
            require_admin(db, SessionIdentity(email="reader@example.com"))

    def test_unknown_user_is_forbidden(self, db):
        with pytest.raises(Forbidden):
            require_admin(db, SessionIdentity(email="nobody@example.com"))

    def test_stored_admin_role(self, db):
        db.add(User(id="a1", email="editor@example.com", name="Editor", role="admin"))
        db.commit()
        user = require_admin(db, SessionIdentity(email="editor@example.com"))
        assert user.id == "a1"

    def test_owner_without_stored_user(self, db):
        assert require_admin(db, SessionIdentity(email=OWNER)) is None

    def test_token_role_claim_is_ignored(self, db):
        """Only the stored role counts, not whatever the session carries."""
        with pytest.raises(Forbidden):
            require_admin(db, SessionIdentity(email="sneaky@example.com", role="admin"))


class TestCanDeleteComment:
    """Tests for can_delete_comment."""

    @pytest.fixture
    def comment(self, db):
        author = User(id="author", email="author@example.com", role="reader")
        post = Post(title="T", slug="t")
        db.add_all([author, post])
        db.flush()
        comment = Comment(post_id=post.id, user_id=author.id, content="Nice post")
        db.add(comment)
        db.commit()
        return comment

    def test_author_may_delete(self, db, comment):
        author = db.get(User, "author")
        assert can_delete_comment(SessionIdentity(email=author.email), comment, author) is True

    def test_other_reader_may_not(self, db, comment):
        other = User(id="other", email="other@example.com", role="reader")
        db.add(other)
        db.commit()
        assert can_delete_comment(SessionIdentity(email=other.email), comment, other) is False

    def test_admin_may_delete(self, db, comment):
        admin = User(id="admin", email="admin@example.com", role="admin")
        db.add(admin)
        db.commit()
        assert can_delete_comment(SessionIdentity(email=admin.email), comment, admin) is True

    def test_owner_without_user_record(self, comment):
        assert can_delete_comment(SessionIdentity(email=OWNER), comment, None) is True
