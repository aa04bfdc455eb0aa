import pytest
from unittest.mock import AsyncMock, MagicMock

from tillauth.adapter.services.memory_revocation_cache import MemoryRevocationCache
from tillauth.app.services.revocation_cache import IRevocationCache, StoreUnavailableError
from tillauth.app.services.token_service import TokenService

TEST_SECRET = "unit-test-secret"


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()
    uow.users.create = AsyncMock()
    uow.users.update = AsyncMock()
    uow.users.delete = AsyncMock()
    uow.users.list_all = AsyncMock()

    uow.user_sessions = MagicMock()
    uow.user_sessions.create = AsyncMock()
    uow.user_sessions.update = AsyncMock()
    uow.user_sessions.get_latest_open_for_update = AsyncMock()
    uow.user_sessions.list_since = AsyncMock()
    uow.user_sessions.delete_older_than = AsyncMock(return_value=0)
    uow.user_sessions.delete_by_email = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def cache():
    return MemoryRevocationCache()


@pytest.fixture
def token_service(cache):
    return TokenService(secret=TEST_SECRET, cache=cache)


class UnavailableCache(IRevocationCache):
    """Cache whose backend cannot be reached"""

    async def set(self, key, value, ttl=None):
        raise StoreUnavailableError("Revocation cache unavailable")

    async def get(self, key):
        raise StoreUnavailableError("Revocation cache unavailable")

    async def delete(self, key):
        raise StoreUnavailableError("Revocation cache unavailable")


@pytest.fixture
def unavailable_token_service():
    return TokenService(secret=TEST_SECRET, cache=UnavailableCache())
