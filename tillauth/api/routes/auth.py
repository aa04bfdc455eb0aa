from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field

from libs.result import Error
from tillauth.api.error import ClientError, ServerError
from tillauth.api.utils.auth_gate import AuthenticatedPrincipal
from tillauth.api.utils.cookies import clear_auth_cookies, set_access_cookie, set_refresh_cookie
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    RegisterResponse,
    RegisterUseCase,
    ResetPasswordResponse,
    ResetPasswordUseCase,
    UserInfo,
)
from tillauth.depends import get_current_principal, get_token_service, get_unit_of_work
from tillauth.domain.base import normalize_email
from tillauth.domain.entities import UserRole

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Fields are optional so that missing values surface as MISSING_CREDENTIALS.
    """

    email: Optional[EmailStr] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password (min 8 chars)")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
async def register(
    request: Request,
    body: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Register a new user with the user role.

    Raises:
        - 400 Bad Request: Missing fields or password too short
        - 409 Conflict: Email already registered
    """
    use_case = RegisterUseCase(uow, bcrypt_rounds=request.app.state.bcrypt_rounds)
    result = await use_case.execute(body.email, body.password)

    if result.is_err():
        error = result.error
        if error.code in ("MISSING_CREDENTIALS", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: Request,
    body: LoginRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
):
    """
    User Login

    Verifies credentials, opens a session record and sets the accessToken and
    refreshToken cookies. The access token is also returned in the body.

    Raises:
        - 400 Bad Request: Missing email or password
        - 401 Unauthorized: Invalid credentials (no cookies set)
    """
    use_case = LoginUseCase(uow, token_service, bcrypt_rounds=request.app.state.bcrypt_rounds)
    result = await use_case.execute(body.email, body.password)

    if result.is_err():
        error = result.error
        if error.code == "MISSING_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    login_result = result.value
    secure = request.app.state.cookie_secure
    set_refresh_cookie(response, login_result.refresh_token, token_service.refresh_ttl, secure)
    set_access_cookie(response, login_result.access_token, token_service.access_ttl, secure)

    return LoginResponse(
        success=True, user=login_result.user, accessToken=login_result.access_token
    )


class LogoutRequest(BaseModel):
    """Logout HTTP request payload"""

    email: Optional[str] = Field(None, description="Email of the user logging out")


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: Request,
    body: LogoutRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
):
    """
    User Logout

    Closes the latest open session record, revokes the refresh token and clears
    both cookies.

    Raises:
        - 400 Bad Request: Missing email
        - 404 Not Found: No open session for this email
    """
    use_case = LogoutUseCase(uow, token_service)
    result = await use_case.execute(body.email)

    if result.is_err():
        error = result.error
        if error.code == "MISSING_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "NO_ACTIVE_SESSION":
            raise ClientError(
                Error(error.code, "No active session"), status_code=status.HTTP_404_NOT_FOUND
            )
        raise ServerError(error)

    clear_auth_cookies(response, request.app.state.cookie_secure)
    return result.value


class ResetPasswordRequest(BaseModel):
    """Reset password HTTP request payload"""

    email: Optional[str] = Field(None, description="Email of the account to reset")
    newPassword: Optional[str] = Field(None, description="New password (min 8 chars)")


@router.post(
    "/reset-password", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse
)
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Reset Password

    Users may reset their own password; admins may reset anyone's. The target's
    refresh token is revoked.

    Raises:
        - 400 Bad Request: Missing fields or password too short
        - 403 Forbidden: Resetting another user's password without admin role
        - 404 Not Found: User not found
    """
    is_self = body.email is not None and normalize_email(body.email) == principal.email
    if not is_self and principal.role != UserRole.admin.value:
        raise ClientError(
            Error("FORBIDDEN", "Only admins can reset other users' passwords"),
            status_code=status.HTTP_403_FORBIDDEN,
        )

    use_case = ResetPasswordUseCase(
        uow, token_service, bcrypt_rounds=request.app.state.bcrypt_rounds
    )
    result = await use_case.execute(body.email, body.newPassword)

    if result.is_err():
        error = result.error
        if error.code in ("MISSING_CREDENTIALS", "INVALID_PASSWORD"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def me(principal: AuthenticatedPrincipal = Depends(get_current_principal)):
    """Return the authenticated principal"""
    return UserInfo(id=principal.id, email=principal.email, role=principal.role)
