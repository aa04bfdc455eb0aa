"""
Revocation Cache

Key-value store holding the single trusted refresh token per principal under
``refreshToken:<email>``. A refresh token is honored only while it equals the
cached value, so deleting the entry revokes it immediately.

Implementations live in tillauth.adapter.services; the instance is built by
the application factory and injected, never imported as a global.
"""

from abc import ABC, abstractmethod
from typing import Optional


REFRESH_TOKEN_KEY_PREFIX = "refreshToken:"


def refresh_token_key(email: str) -> str:
    return f"{REFRESH_TOKEN_KEY_PREFIX}{email}"


class StoreUnavailableError(Exception):
    """Raised when the cache backend cannot be reached in bounded time"""


class IRevocationCache(ABC):
    """Revocation cache interface - get/set/delete with optional TTL"""

    @abstractmethod
    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """
        Store value under key, replacing any previous value. ttl in seconds;
        None keeps the entry until deleted, zero or less removes the key.
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the live value for key, or None if absent or expired"""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key if present"""
        pass

    async def close(self) -> None:
        """Release backend resources"""
        return None
