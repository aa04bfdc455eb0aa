"""
Session Ledger

Records login/logout timestamps per principal. Records are only ever inserted,
closed once by logout, or purged by retention.
"""

import logging
import math
from datetime import datetime

from libs.result import Error, Result, Return
from tillauth.app.repositories.user_session_repository import IUserSessionRepository
from tillauth.domain.entities import UserSession

logger = logging.getLogger(__name__)


def duration_in_minutes(login_time: datetime, logout_time: datetime) -> int:
    """Whole minutes between login and logout, rounded half up, never negative"""
    seconds = (logout_time - login_time).total_seconds()
    return max(0, math.floor(seconds / 60 + 0.5))


class SessionLedger:
    """
    Operates inside the caller's unit of work; the caller commits.
    """

    def __init__(self, repository: IUserSessionRepository):
        self.repository = repository

    async def open_session(self, email: str, at: datetime) -> UserSession:
        # Concurrent open records (several devices) are allowed.
        user_session = UserSession(user_email=email, login_time=at)
        return await self.repository.create(user_session)

    async def close_session(self, email: str, at: datetime) -> Result[UserSession]:
        user_session = await self.repository.get_latest_open_for_update(email)
        if user_session is None:
            return Return.err(
                Error("NO_ACTIVE_SESSION", f"No active session for {email}")
            )

        user_session.logout_time = at
        user_session.duration_minutes = duration_in_minutes(user_session.login_time, at)
        user_session = await self.repository.update(user_session)
        logger.info(
            f"Closed session {user_session.id} for {email} "
            f"after {user_session.duration_minutes} minutes"
        )
        return Return.ok(user_session)

    async def purge_older_than(self, cutoff: datetime) -> int:
        count = await self.repository.delete_older_than(cutoff)
        if count:
            logger.info(f"Purged {count} session record(s) older than {cutoff.isoformat()}")
        return count
