from libs.result import Result, Return
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.entities import UserRole
from .dtos import ListUsersResponse, UserSummary


class ListUsersUseCase:
    """Lists every principal in the credential store, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[ListUsersResponse]:
        async with self.uow:
            users = await self.uow.users.list_all()

        return Return.ok(
            ListUsersResponse(
                success=True,
                users=[
                    UserSummary(
                        id=user.id,
                        email=user.email,
                        role=UserRole(user.role).value,
                        created_at=user.created_at,
                        updated_at=user.updated_at,
                    )
                    for user in users
                ],
            )
        )
