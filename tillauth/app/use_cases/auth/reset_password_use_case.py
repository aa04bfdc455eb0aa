"""
Reset Password Use Case

Replaces a user's password hash and revokes their refresh token.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.base import normalize_email
from .dtos import ResetPasswordResponse
from .password_policy import hash_password, validate_password

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for resetting a password.

    Business Rules:
    - Password must be at least 8 characters
    - Refresh token entry is deleted so existing refresh tokens stop working
    - Open session records are left for logout to close
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService, bcrypt_rounds: int = 12):
        self.uow = uow
        self.token_service = token_service
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, email: Optional[str], new_password: Optional[str]
    ) -> Result[ResetPasswordResponse]:
        if not email or not new_password:
            return Return.err(Error("MISSING_CREDENTIALS", "Missing fields"))

        password_result = validate_password(new_password)
        if password_result.is_err():
            return password_result

        email = normalize_email(email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            user.password_hash = hash_password(new_password, self.bcrypt_rounds)
            await self.uow.users.update(user)
            await self.token_service.revoke_refresh(email)
            await self.uow.commit()

        logger.info(f"Password reset for {email}, refresh token revoked")

        return Return.ok(
            ResetPasswordResponse(success=True, message="Password reset successful")
        )
