import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from tillauth.app.services.revocation_cache import IRevocationCache

logger = logging.getLogger(__name__)


class MemoryRevocationCache(IRevocationCache):
    """
    Process-local revocation cache.

    Entries carry an optional deadline on the monotonic clock and are evicted
    lazily when read. The last set for a key wins. Not shared between
    processes: multi-instance deployments need RedisRevocationCache.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        if ttl is not None and ttl <= 0:
            # Already expired: nothing is retained
            await self.delete(key)
            return

        expires_at = self._clock() + ttl if ttl is not None else None
        with self._lock:
            self._entries[key] = (value, expires_at)
        logger.debug(f"Cache SET {key}")

    async def get(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)
        logger.debug(f"Cache DEL {key}")
