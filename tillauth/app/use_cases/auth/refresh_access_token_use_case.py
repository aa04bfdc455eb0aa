"""
Refresh Access Token Use Case

Mints a new access token from a refresh token that is still the cached one.
"""

import logging

from libs.result import Error, Result, Return
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.entities import UserRole
from .dtos import RefreshedAccess, UserInfo

logger = logging.getLogger(__name__)


class RefreshAccessTokenUseCase:
    """
    Use case for refreshing an access token.

    Business Rules:
    - Refresh token must have a valid signature and be unexpired
    - Refresh token must equal the cached value for its email (else TOKEN_REVOKED)
    - The role comes from the credential store, since refresh tokens carry none
    - The refresh token itself and its cache entry are not touched
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, refresh_token: str) -> Result[RefreshedAccess]:
        verified = await self.token_service.verify_refresh(refresh_token)
        if verified.is_err():
            return verified

        claims = verified.value
        async with self.uow:
            user = await self.uow.users.get_by_email(claims.email)

        if user is None or user.id != claims.id:
            return Return.err(Error("TOKEN_INVALID", "Refresh token principal not found"))

        role = UserRole(user.role).value
        access_token = self.token_service.issue_access(user.id, user.email, role)
        logger.info(f"Issued refreshed access token for {user.email}")

        return Return.ok(
            RefreshedAccess(
                access_token=access_token,
                user=UserInfo(id=user.id, email=user.email, role=role),
            )
        )
