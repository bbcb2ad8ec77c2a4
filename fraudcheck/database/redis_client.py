"""
Redis-backed feature store
One long-lived async client, records kept as Redis hashes
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Union

from redis import asyncio as aioredis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from fraudcheck.config import Settings
from fraudcheck.errors import StorageError

logger = logging.getLogger(__name__)

Key = Union[str, int]


class BaseFeatureStore(ABC):
    """Key-value store addressed by (namespace, set, key)"""

    @abstractmethod
    async def put(self, namespace: str, set_name: str, key: Key, fields: Mapping[str, Any]) -> None:
        pass

    @abstractmethod
    async def get(self, namespace: str, set_name: str, key: Key) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def ping(self) -> bool:
        pass

    @abstractmethod
    async def close(self) -> None:
        pass


def make_key(namespace: str, set_name: str, key: Key) -> str:
    return f"{namespace}:{set_name}:{key}"


class RedisFeatureStore(BaseFeatureStore):
    """Feature store on top of redis.asyncio (pooled, safe for concurrent requests)"""

    def __init__(self, client: Redis):
        self._client = client

    @classmethod
    async def connect(cls, settings: Settings) -> "RedisFeatureStore":
        """
        Create the client and check it answers

        Raises:
            StorageError: connection or ping failed
        """
        url = settings.store_url()
        client = aioredis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_keepalive=True,
            health_check_interval=30
        )
        try:
            await client.ping()
        except RedisError as e:
            await client.aclose()
            raise StorageError(f"store connection failed: {e}") from e

        logger.info(f"✅ Redis connected: {url.split('@')[-1]}")
        return cls(client)

    async def put(self, namespace: str, set_name: str, key: Key, fields: Mapping[str, Any]) -> None:
        """Write all fields of one record (existing fields are overwritten)"""
        if not fields:
            raise StorageError(f"refusing to write empty record {key}")

        mapping = {}
        for name, value in fields.items():
            if not isinstance(value, (str, int, float)) or isinstance(value, bool):
                raise StorageError(
                    f"field {name} has unsupported type {type(value).__name__}"
                )
            mapping[name] = value

        redis_key = make_key(namespace, set_name, key)
        try:
            await self._client.hset(redis_key, mapping=mapping)
        except RedisError as e:
            logger.error(f"❌ Store write failed for {redis_key}: {e}")
            raise StorageError(f"store write failed: {e}") from e

        logger.debug(f"💾 Stored {redis_key} ({len(mapping)} fields)")

    async def get(self, namespace: str, set_name: str, key: Key) -> Dict[str, Any]:
        """
        Read one record

        Raises:
            StorageError: read failed or no record under the key
        """
        redis_key = make_key(namespace, set_name, key)
        try:
            fields = await self._client.hgetall(redis_key)
        except RedisError as e:
            logger.error(f"❌ Store read failed for {redis_key}: {e}")
            raise StorageError(f"store read failed: {e}") from e

        if not fields:
            raise StorageError(f"record not found: {redis_key}")
        return dict(fields)

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning(f"⚠️ Redis ping failed: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection"""
        await self._client.aclose()
        logger.info("Redis connection closed")
