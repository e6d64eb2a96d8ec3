"""Editor draft autosave backed by Redis."""

import json
import logging
from datetime import UTC, datetime

import redis

from shiori.config import get_settings
from shiori.errors import ServiceUnavailable
from shiori.schemas.draft import Draft

logger = logging.getLogger(__name__)
settings = get_settings()

DRAFT_KEY_PREFIX = "shiori_blog_draft"

_redis: redis.Redis | None = None


def get_redis() -> redis.Redis:
    """Get the shared Redis client."""
    global _redis
    if _redis is None:
        _redis = redis.from_url(settings.redis_url)
    return _redis


class DraftStore:
    """Key-value store holding one in-progress post per editor.

    The editor writes on a debounce timer and clears the draft after a
    successful publish.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int | None = None):
        self.client = client
        self.ttl_seconds = ttl_seconds or settings.draft_ttl_seconds

    @staticmethod
    def key_for(owner: str) -> str:
        return f"{DRAFT_KEY_PREFIX}:{owner}"

    def load(self, owner: str) -> Draft | None:
        try:
            raw = self.client.get(self.key_for(owner))
        except redis.RedisError as e:
            logger.error(f"Failed to load draft: {e}")
            raise ServiceUnavailable("Draft storage unavailable") from e

        if raw is None:
            return None
        try:
            return Draft.model_validate(json.loads(raw))
        except ValueError:
            logger.warning(f"Discarding unreadable draft under {self.key_for(owner)}")
            return None

    def save(self, owner: str, draft: Draft) -> Draft:
        stamped = draft.model_copy(update={"saved_at": datetime.now(UTC)})
        try:
            self.client.set(
                self.key_for(owner),
                stamped.model_dump_json(by_alias=True),
                ex=self.ttl_seconds,
            )
        except redis.RedisError as e:
            logger.error(f"Failed to save draft: {e}")
            raise ServiceUnavailable("Draft storage unavailable") from e
        return stamped

    def clear(self, owner: str) -> None:
        try:
            self.client.delete(self.key_for(owner))
        except redis.RedisError as e:
            logger.error(f"Failed to clear draft: {e}")
            raise ServiceUnavailable("Draft storage unavailable") from e
