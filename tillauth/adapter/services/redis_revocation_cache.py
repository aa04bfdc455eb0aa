import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from tillauth.app.services.revocation_cache import IRevocationCache, StoreUnavailableError

logger = logging.getLogger(__name__)


class RedisRevocationCache(IRevocationCache):
    """Shared revocation cache for multi-instance deployments"""

    def __init__(self, redis_url: str, *, socket_timeout: float = 5.0, client=None):
        self.redis_url = redis_url
        self.client = client if client is not None else aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        if ttl is not None and ttl <= 0:
            # Redis rejects EX 0; an already expired entry is simply absent
            await self.delete(key)
            return

        try:
            await self.client.set(key, value, ex=ttl)
        except (RedisError, OSError) as exc:
            logger.error(f"Redis SET failed for {key}: {exc.__class__.__name__}")
            raise StoreUnavailableError("Revocation cache unavailable") from exc

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.client.get(key)
        except (RedisError, OSError) as exc:
            logger.error(f"Redis GET failed for {key}: {exc.__class__.__name__}")
            raise StoreUnavailableError("Revocation cache unavailable") from exc

    async def delete(self, key: str) -> None:
        try:
            await self.client.delete(key)
        except (RedisError, OSError) as exc:
            logger.error(f"Redis DEL failed for {key}: {exc.__class__.__name__}")
            raise StoreUnavailableError("Revocation cache unavailable") from exc

    async def close(self) -> None:
        await self.client.aclose()
