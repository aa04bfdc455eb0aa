"""
Login Use Case

Authenticates a principal, issues the token pair and opens a session record.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Error, Result, Return
from tillauth.app.services.session_ledger import SessionLedger
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.base import normalize_email, utc_now
from tillauth.domain.entities import UserRole
from .dtos import LoginResult, UserInfo
from .password_policy import hash_password, verify_password

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Email is normalized before lookup
    - Unknown email and wrong password give the same error
    - A password hash is always checked, even for unknown emails
    - Opens a new session record; existing open records are left alone
    - The new refresh token supersedes any cached one for the principal
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService, bcrypt_rounds: int = 12):
        self.uow = uow
        self.token_service = token_service
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self,
        email: Optional[str],
        password: Optional[str],
        now: Optional[datetime] = None,
    ) -> Result[LoginResult]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password
            now: Login time (naive UTC), defaults to the current time

        Returns:
            Result with LoginResult containing tokens and user info, or Error
        """
        if not email or not password:
            return Return.err(Error("MISSING_CREDENTIALS", "Missing email or password"))

        email = normalize_email(email)
        login_time = now or utc_now()

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                # Keep timing comparable to a real hash check
                verify_password(password, hash_password("dummy_password", self.bcrypt_rounds))
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

            if not verify_password(password, user.password_hash):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid credentials"))

            role = UserRole(user.role).value
            tokens = self.token_service.issue(user.id, user.email, role)

            ledger = SessionLedger(self.uow.user_sessions)
            user_session = await ledger.open_session(user.email, login_time)

            # A cache failure raises here and the session record is rolled back
            await self.token_service.register_refresh(user.email, tokens.refresh_token)
            await self.uow.commit()

        logger.info(f"User {user.email} logged in, session {user_session.id}")

        return Return.ok(
            LoginResult(
                user=UserInfo(id=user.id, email=user.email, role=role),
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                session_id=user_session.id,
            )
        )
