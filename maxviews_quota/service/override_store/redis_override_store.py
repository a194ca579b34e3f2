"""Redis-based override store."""

import logging
from typing import Optional

import redis.asyncio as redis

from maxviews_quota.errors import DataAccessError
from maxviews_quota.models.content import OverrideRecord
from maxviews_quota.service.override_store.base import OverrideStore

logger = logging.getLogger(__name__)


class RedisOverrideStore(OverrideStore):
    """
    Override store reading Redis hashes.

    Each override lives in a hash ``{prefix}:{item_id}:{user_id}`` with the
    fields ``maxviews`` (extra views) and ``lastreset`` (epoch seconds).
    """

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "maxviews:override"):
        """
        Initialize the override store.

        Args:
            redis_client: Async Redis client instance
            key_prefix: Prefix of the override hash keys
        """
        self.redis_client: redis.Redis = redis_client
        self.key_prefix = key_prefix

    def key(self, item_id: str, user_id: str) -> str:
        return f"{self.key_prefix}:{item_id}:{user_id}"

    async def get(self, item_id: str, user_id: str) -> Optional[OverrideRecord]:
        key = self.key(item_id, user_id)
        try:
            data = await self.redis_client.hgetall(key)  # type: ignore
        except redis.RedisError as e:
            logger.error(
                "Redis override lookup failed for item %s, user %s: %s",
                item_id,
                user_id,
                str(e),
            )
            raise DataAccessError(f"Could not read override {key}: {e}") from e

        if not data:
            return None

        fields = {
            (k.decode("utf-8") if isinstance(k, bytes) else k): v for k, v in data.items()
        }
        return OverrideRecord.from_mapping(item_id, user_id, fields)

    def __str__(self) -> str:
        return f"RedisOverrideStore(key_prefix={self.key_prefix})"
