from fastapi import APIRouter, Depends, status

from tillauth.api.error import ClientError, ServerError
from tillauth.api.utils.auth_gate import AuthenticatedPrincipal
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.app.use_cases.users import (
    DeleteUserResponse,
    DeleteUserUseCase,
    ListUsersResponse,
    ListUsersUseCase,
)
from tillauth.depends import get_token_service, get_unit_of_work, require_admin

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ListUsersResponse)
async def list_users(
    admin: AuthenticatedPrincipal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List all users, newest first (admin only)"""
    use_case = ListUsersUseCase(uow)
    result = await use_case.execute()

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_model=DeleteUserResponse)
async def delete_user(
    user_id: int,
    admin: AuthenticatedPrincipal = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Delete User (admin only)

    Removes the user, their session records and their refresh token.

    Raises:
        - 403 Forbidden: Target is an admin
        - 404 Not Found: User not found
    """
    use_case = DeleteUserUseCase(uow, token_service)
    result = await use_case.execute(user_id)

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "CANNOT_DELETE_ADMIN":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value
