"""
Delete User Use Case

Removes a principal, their session records and their refresh token.
"""

import logging

from libs.result import Error, Result, Return
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.entities import UserRole
from .dtos import DeleteUserResponse

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user.

    Business Rules:
    - Admin accounts cannot be deleted
    - The user's session records are deleted with the user
    - The cached refresh token is revoked
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(self, user_id: int) -> Result[DeleteUserResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            if UserRole(user.role) == UserRole.admin:
                return Return.err(
                    Error("CANNOT_DELETE_ADMIN", "Cannot delete admin user")
                )

            email = user.email
            await self.uow.users.delete(user)
            deleted_sessions = await self.uow.user_sessions.delete_by_email(email)
            await self.token_service.revoke_refresh(email)
            await self.uow.commit()

        logger.info(f"Deleted user {user_id} ({email}) and {deleted_sessions} session(s)")

        return Return.ok(
            DeleteUserResponse(
                success=True,
                message="User deleted successfully",
                deleted_sessions=deleted_sessions,
            )
        )
