from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from tillauth.domain.entities import UserSession


class IUserSessionRepository(ABC):
    """Session ledger repository interface - application layer"""

    @abstractmethod
    async def create(self, user_session: UserSession) -> UserSession:
        """Insert a new session record"""
        pass

    @abstractmethod
    async def update(self, user_session: UserSession) -> UserSession:
        """Persist changes to an existing session record"""
        pass

    @abstractmethod
    async def get_latest_open_for_update(self, email: str) -> Optional[UserSession]:
        """
        Most recent open record for email, row-locked for the current transaction.
        Ties on login_time are broken by the highest id.
        """
        pass

    @abstractmethod
    async def list_since(self, cutoff: datetime) -> List[UserSession]:
        """All records with login_time >= cutoff, ordered by email then login_time"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records with login_time < cutoff. Returns count deleted."""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete every record for a user. Returns count deleted."""
        pass
