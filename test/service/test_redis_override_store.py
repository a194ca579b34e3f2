"""
Tests for the Redis override store.
"""

from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from maxviews_quota.errors import DataAccessError
from maxviews_quota.models.content import OverrideRecord
from maxviews_quota.service.override_store.null_override_store import (
    NullOverrideStore,
)
from maxviews_quota.service.override_store.redis_override_store import (
    RedisOverrideStore,
)


@pytest.fixture
def redis_client() -> AsyncMock:
    return AsyncMock()


async def test_reads_override_hash(redis_client: AsyncMock) -> None:
    redis_client.hgetall.return_value = {b"maxviews": b"3", b"lastreset": b"1700000000"}
    store = RedisOverrideStore(redis_client)

    record = await store.get("101", "7")

    assert record == OverrideRecord(
        item_id="101", user_id="7", limit_delta=3, reset_timestamp=1700000000
    )
    redis_client.hgetall.assert_awaited_once_with("maxviews:override:101:7")


async def test_missing_override(redis_client: AsyncMock) -> None:
    redis_client.hgetall.return_value = {}
    store = RedisOverrideStore(redis_client, key_prefix="test")

    assert await store.get("101", "7") is None
    redis_client.hgetall.assert_awaited_once_with("test:101:7")


async def test_partial_override(redis_client: AsyncMock) -> None:
    redis_client.hgetall.return_value = {"lastreset": "1700000000"}
    store = RedisOverrideStore(redis_client)

    record = await store.get("101", "7")

    assert record is not None
    assert record.limit_delta == 0
    assert record.reset_timestamp == 1700000000


async def test_malformed_override_fields(redis_client: AsyncMock) -> None:
    redis_client.hgetall.return_value = {b"maxviews": b"lots", b"lastreset": b""}
    store = RedisOverrideStore(redis_client)

    record = await store.get("101", "7")

    assert record == OverrideRecord(item_id="101", user_id="7")


async def test_redis_error_is_raised(redis_client: AsyncMock) -> None:
    redis_client.hgetall.side_effect = redis.ConnectionError("connection refused")
    store = RedisOverrideStore(redis_client)

    with pytest.raises(DataAccessError):
        await store.get("101", "7")


async def test_null_override_store() -> None:
    assert await NullOverrideStore().get("101", "7") is None
