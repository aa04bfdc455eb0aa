"""
Logout Use Case

Closes the latest open session record and revokes the refresh token.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Error, Result, Return
from tillauth.app.services.session_ledger import SessionLedger
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.base import normalize_email, utc_now
from .dtos import LogoutResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Closes only the most recent open record (latest login_time)
    - Read and update happen in one transaction with the row locked
    - The cached refresh token is deleted so it can no longer mint access tokens
    - No open record: NO_ACTIVE_SESSION, nothing is revoked
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(
        self, email: Optional[str], now: Optional[datetime] = None
    ) -> Result[LogoutResponse]:
        if not email:
            return Return.err(Error("MISSING_CREDENTIALS", "Missing email"))

        email = normalize_email(email)
        logout_time = now or utc_now()

        async with self.uow:
            ledger = SessionLedger(self.uow.user_sessions)
            result = await ledger.close_session(email, logout_time)
            if result.is_err():
                return result

            # Revoke before committing so a cache failure leaves the session open
            await self.token_service.revoke_refresh(email)
            await self.uow.commit()

        duration = result.value.duration_minutes
        return Return.ok(
            LogoutResponse(success=True, message="Logged out", duration=f"{duration} minutes")
        )
