"""Redis session backend for multi-process and multi-instance deployments."""

import logging

import redis.asyncio as redis

from storelink.exceptions import SessionStoreError
from storelink.sessions.base import SessionBackend

logger = logging.getLogger(__name__)

KEY_PREFIX = "sess:"


class RedisSessionBackend(SessionBackend):
    """Sessions stored under ``sess:<id>`` with a Redis-side expiry."""

    def __init__(self, url: str, ttl: int, prefix: str = KEY_PREFIX) -> None:
        super().__init__(ttl)
        self.url = url
        self.prefix = prefix
        self._client: redis.Redis | None = None

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            raise SessionStoreError("Redis session backend is not connected")
        return self._client

    def _key(self, session_id: str) -> str:
        return f"{self.prefix}{session_id}"

    async def connect(self) -> None:
        self._client = redis.from_url(self.url, decode_responses=True)
        try:
            await self._client.ping()
        except redis.RedisError as e:
            await self._client.aclose()
            self._client = None
            raise SessionStoreError(f"Cannot reach Redis: {e}") from e
        logger.info("Connected to Redis session store")

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _read(self, session_id: str) -> str | None:
        try:
            return await self.client.get(self._key(session_id))
        except redis.RedisError as e:
            raise SessionStoreError(f"Failed to read session {session_id[:8]}: {e}") from e

    async def _write(self, session_id: str, payload: str) -> None:
        try:
            await self.client.set(self._key(session_id), payload, ex=self.ttl)
        except redis.RedisError as e:
            raise SessionStoreError(f"Failed to write session {session_id[:8]}: {e}") from e

    async def _remove(self, session_id: str) -> None:
        try:
            await self.client.delete(self._key(session_id))
        except redis.RedisError as e:
            raise SessionStoreError(f"Failed to delete session {session_id[:8]}: {e}") from e
