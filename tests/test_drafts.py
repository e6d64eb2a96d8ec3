"""Tests for editor draft autosave."""

import json
from unittest.mock import MagicMock, patch

import pytest
import redis

from shiori.api.dependencies import get_draft_store
from shiori.errors import ServiceUnavailable
from shiori.main import app
from shiori.schemas.draft import Draft
from shiori.services.drafts import DraftStore, get_redis


@pytest.fixture
def mock_redis():
    return MagicMock()


@pytest.fixture
def store(mock_redis):
    return DraftStore(mock_redis, ttl_seconds=60)


@pytest.fixture
def draft_client(client, store):
    """Test client whose draft store talks to a mocked Redis."""
    app.dependency_overrides[get_draft_store] = lambda: store
    yield client
    app.dependency_overrides.pop(get_draft_store, None)


class TestGetRedis:
    """Tests for get_redis."""

    def test_creates_and_reuses_client(self):
        import shiori.services.drafts as drafts_module

        drafts_module._redis = None
        with patch("shiori.services.drafts.redis.from_url") as mock_from_url:
            mock_from_url.return_value = MagicMock()
            first = get_redis()
            second = get_redis()

        assert first is second
        mock_from_url.assert_called_once()
        drafts_module._redis = None


class TestDraftStore:
    """Tests for DraftStore."""

    def test_key_per_owner(self):
        assert DraftStore.key_for("owner@example.com") == "shiori_blog_draft:owner@example.com"

    def test_save_stamps_and_sets_ttl(self, store, mock_redis):
        saved = store.save("owner@example.com", Draft(title="Hello", content="<p>Hi</p>"))

        assert saved.saved_at is not None
        key, payload = mock_redis.set.call_args.args
        assert key == "shiori_blog_draft:owner@example.com"
        assert mock_redis.set.call_args.kwargs["ex"] == 60
        stored = json.loads(payload)
        assert stored["title"] == "Hello"
        assert "savedAt" in stored

    def test_load_missing(self, store, mock_redis):
        mock_redis.get.return_value = None
        assert store.load("owner@example.com") is None

    def test_load_existing(self, store, mock_redis):
        mock_redis.get.return_value = json.dumps({"title": "Saved", "imageUrl": "x.png"}).encode()
        draft = store.load("owner@example.com")
        assert draft.title == "Saved"
        assert draft.image_url == "x.png"

    def test_load_corrupt_draft(self, store, mock_redis):
        mock_redis.get.return_value = b"{not json"
        assert store.load("owner@example.com") is None

    def test_clear(self, store, mock_redis):
        store.clear("owner@example.com")
        mock_redis.delete.assert_called_once_with("shiori_blog_draft:owner@example.com")

    def test_redis_outage(self, store, mock_redis):
        mock_redis.get.side_effect = redis.ConnectionError("down")
        with pytest.raises(ServiceUnavailable):
            store.load("owner@example.com")


def test_save_and_load_draft_endpoint(draft_client, owner_headers, mock_redis):
    response = draft_client.put(
        "/api/drafts", headers=owner_headers, json={"title": "WIP", "slug": "wip"}
    )
    assert response.status_code == 200
    assert response.json()["title"] == "WIP"
    assert response.json()["savedAt"] is not None

    mock_redis.get.return_value = mock_redis.set.call_args.args[1]
    response = draft_client.get("/api/drafts", headers=owner_headers)
    assert response.status_code == 200
    assert response.json()["slug"] == "wip"


def test_get_missing_draft(draft_client, owner_headers, mock_redis):
    mock_redis.get.return_value = None
    response = draft_client.get("/api/drafts", headers=owner_headers)
    assert response.status_code == 404


def test_clear_draft_endpoint(draft_client, owner_headers, mock_redis):
    response = draft_client.delete("/api/drafts", headers=owner_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}
    mock_redis.delete.assert_called_once()


def test_drafts_require_admin(draft_client, reader_headers):
    assert draft_client.get("/api/drafts").status_code == 401
    assert draft_client.get("/api/drafts", headers=reader_headers).status_code == 403


def test_draft_store_outage_is_503(draft_client, owner_headers, mock_redis):
    mock_redis.set.side_effect = redis.ConnectionError("down")
    response = draft_client.put("/api/drafts", headers=owner_headers, json={"title": "WIP"})
    assert response.status_code == 503
    assert response.json()["error"] == "Draft storage unavailable"
