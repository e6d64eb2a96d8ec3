"""Pytest configuration and fixtures."""

import os

# The owner account must be known before settings are first read
os.environ.setdefault("ADMIN_EMAIL", "owner@example.com")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shiori.config import get_settings
from shiori.database import Base, get_db
from shiori.main import app
from shiori.models import Post, User
from shiori.models.enums import Role
from shiori.services.auth import create_access_token

ADMIN_EMAIL = get_settings().admin_email


class AuthHeaders(dict):
    """Dict subclass that also stores the session email."""

    def __init__(self, *args, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/shiori_blog", "/shiori_blog_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def session_headers(email: str, name: str | None = None, image: str | None = None) -> AuthHeaders:
    """Bearer headers for a session as issued by the sign-in service."""
    token = create_access_token(email, name, image)
    return AuthHeaders({"Authorization": f"Bearer {token}"}, email=email)


@pytest.fixture
def auth_headers(client):
    """Register and log in a credentials reader."""
    email = "test@example.com"
    response = client.post(
        "/api/auth/register",
        data={"name": "Test User", "email": email, "password": "testpass123"},
    )
    assert response.status_code == 201

    response = client.post("/api/auth/login", json={"email": email, "password": "testpass123"})
    assert response.status_code == 200
    token = response.json()["accessToken"]
    return AuthHeaders({"Authorization": f"Bearer {token}"}, email=email)


@pytest.fixture
def make_session():
    """Factory for bearer headers of arbitrary session identities."""
    return session_headers


@pytest.fixture
def reader_headers():
    """Session for a social sign-in reader with no stored user yet."""
    return session_headers("reader@example.com", "Reader", "https://example.com/reader.png")


@pytest.fixture
def other_reader_headers():
    return session_headers("other@example.com", "Other Reader")


@pytest.fixture
def owner_headers():
    """Session for the configured owner email."""
    return session_headers(ADMIN_EMAIL, "Shiori")


@pytest.fixture
def role_admin_headers(db):
    """Session for a stored user whose role is admin."""
    db.add(User(id="role-admin", email="editor@example.com", name="Editor", role=Role.ADMIN.value))
    db.commit()
    return session_headers("editor@example.com", "Editor")


@pytest.fixture
def post(db):
    """A published post."""
    post = Post(title="Hello World", slug="hello-world", excerpt="First post", content="<p>Hi</p>")
    db.add(post)
    db.commit()
    db.refresh(post)
    return post


@pytest.fixture
def other_post(db):
    post = Post(title="Second", slug="second-post", content="<p>Another</p>")
    db.add(post)
    db.commit()
    db.refresh(post)
    return post
