"""Tests for RedisContentStore."""

from typing import Any
from unittest.mock import AsyncMock, patch

import pytest
from redis.exceptions import ConnectionError, ResponseError, TimeoutError

from hashbrowns.content_store import RedisContentStore
from hashbrowns.errors import NotFound, StorageUnavailable


class TestRedisContentStore:
    """Test cases for the Redis store."""

    async def test_should_round_trip_under_prefix(
        self, redis_store: RedisContentStore, redis_client: Any
    ):
        entry = await redis_store.store_content("hello")
        assert redis_client.data == {"test:zYpOLmCQ": "hello"}
        assert await redis_store.get(entry.key) == "hello"

    async def test_should_raise_not_found_for_missing_key(
        self, redis_store: RedisContentStore
    ):
        with pytest.raises(NotFound):
            await redis_store.get("missing0")

    async def test_should_apply_ttl_when_configured(self, redis_client: Any):
        store = RedisContentStore(client=redis_client, ttl_seconds=60)
        await store.put("abcd1234", "value")
        redis_client.set.assert_awaited_once_with(
            "hashbrowns:abcd1234", "value", ex=60
        )

    async def test_should_not_expire_without_ttl(self, redis_client: Any):
        store = RedisContentStore(client=redis_client)
        await store.put("abcd1234", "value")
        redis_client.set.assert_awaited_once_with(
            "hashbrowns:abcd1234", "value", ex=None
        )

    async def test_should_retry_transient_errors(
        self, redis_store: RedisContentStore, redis_client: Any
    ):
        redis_client.get.side_effect = [TimeoutError("slow"), "value"]
        assert await redis_store.get("abcd1234") == "value"
        assert redis_client.get.await_count == 2

    async def test_should_raise_storage_unavailable_after_retries(
        self, redis_store: RedisContentStore, redis_client: Any
    ):
        redis_client.get.side_effect = ConnectionError("refused")
        with pytest.raises(StorageUnavailable):
            await redis_store.get("abcd1234")
        # One attempt plus two retries
        assert redis_client.get.await_count == 3

    async def test_unavailable_store_should_never_report_not_found(
        self, redis_store: RedisContentStore, redis_client: Any
    ):
        redis_client.set.side_effect = ConnectionError("refused")
        with pytest.raises(StorageUnavailable) as exc_info:
            await redis_store.put("abcd1234", "value")
        assert not isinstance(exc_info.value, NotFound)

    async def test_should_not_retry_command_errors(
        self, redis_store: RedisContentStore, redis_client: Any
    ):
        redis_client.get.side_effect = ResponseError("WRONGTYPE")
        with pytest.raises(StorageUnavailable):
            await redis_store.get("abcd1234")
        assert redis_client.get.await_count == 1

    async def test_ping_should_report_failures(
        self, redis_store: RedisContentStore, redis_client: Any
    ):
        assert await redis_store.ping() is True
        redis_client.ping.side_effect = ConnectionError("refused")
        assert await redis_store.ping() is False

    async def test_close_should_release_client(self, redis_client: Any):
        store = RedisContentStore(client=redis_client)
        await store.close()
        redis_client.aclose.assert_awaited_once()

    def test_should_build_client_from_url(self):
        store = RedisContentStore(redis_url="redis://cache:6379/1", socket_timeout=2.0)
        with patch(
            "hashbrowns.content_store.redis_store.Redis.from_url",
            return_value=AsyncMock(),
        ) as mock_from_url:
            store.client
            store.client
        mock_from_url.assert_called_once()
        args, kwargs = mock_from_url.call_args
        assert args == ("redis://cache:6379/1",)
        assert kwargs["decode_responses"] is True
        assert kwargs["socket_timeout"] == 2.0
