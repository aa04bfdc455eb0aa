"""
Register Use Case

Creates a credential store record for a new principal.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.base import normalize_email
from tillauth.domain.entities import User, UserRole
from .dtos import RegisterResponse
from .password_policy import hash_password, validate_password

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for registering a new user.

    Business Rules:
    - Email and password are required
    - Email is normalized (trimmed, lower-cased) and must be unique
    - Password must be at least 8 characters
    - New principals always get the user role; admins are provisioned elsewhere
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = bcrypt_rounds

    async def execute(
        self, email: Optional[str], password: Optional[str]
    ) -> Result[RegisterResponse]:
        if not email or not password:
            return Return.err(Error("MISSING_CREDENTIALS", "Missing required fields"))

        password_result = validate_password(password)
        if password_result.is_err():
            return password_result

        email = normalize_email(email)

        async with self.uow:
            existing = await self.uow.users.get_by_email(email)
            if existing is not None:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "User already exists")
                )

            user = User(
                email=email,
                password_hash=hash_password(password, self.bcrypt_rounds),
                role=UserRole.user,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

        logger.info(f"Registered user {user.id} ({email})")
        return Return.ok(
            RegisterResponse(success=True, userId=user.id, role=UserRole(user.role).value)
        )
