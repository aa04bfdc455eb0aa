"""
Auth Gate

Request-time authentication for protected routes. Validates the access token
and, when it has expired, tries the refresh cookie:

    no tokens                        -> 401 MISSING_CREDENTIALS
    access valid                     -> proceed
    access malformed                 -> 403 TOKEN_INVALID
    access expired, no refresh       -> 403 TOKEN_EXPIRED
    refresh invalid/expired/revoked  -> 403 (kind of the failure)
    refresh valid and cached         -> new accessToken cookie, proceed

A missing access token with a refresh cookie present is handled as expired,
since the browser drops the access cookie once its max-age passes.
"""

import logging
from typing import Optional

from fastapi import Request, Response, status
from pydantic import BaseModel

from libs.result import Error
from tillauth.api.error import ClientError, ServerError
from tillauth.api.utils.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    set_access_cookie,
)
from tillauth.app.services.token_service import TokenService
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.app.use_cases.auth import RefreshAccessTokenUseCase

logger = logging.getLogger(__name__)

REFRESH_FAILURE_CODES = ("TOKEN_EXPIRED", "TOKEN_INVALID", "TOKEN_REVOKED")


class AuthenticatedPrincipal(BaseModel):
    id: int
    email: str
    role: str


def extract_access_token(request: Request) -> Optional[str]:
    """Access token from the accessToken cookie, else from Authorization: Bearer"""
    token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if token:
        return token

    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


class AuthGate:
    def __init__(self, uow: UnitOfWork, token_service: TokenService, cookie_secure: bool = False):
        self.uow = uow
        self.token_service = token_service
        self.cookie_secure = cookie_secure

    async def authenticate(self, request: Request, response: Response) -> AuthenticatedPrincipal:
        access_token = extract_access_token(request)
        refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE)

        if not access_token and not refresh_token:
            logger.warning("No access or refresh token provided")
            raise ClientError(
                Error("MISSING_CREDENTIALS", "No refresh token or access token provided"),
                status_code=status.HTTP_401_UNAUTHORIZED,
            )

        if access_token:
            result = self.token_service.verify_access(access_token)
            if result.is_ok():
                claims = result.value
                return AuthenticatedPrincipal(id=claims.id, email=claims.email, role=claims.role)

            if result.error.code != "TOKEN_EXPIRED":
                logger.warning("Access token verification failed")
                raise ClientError(
                    Error("TOKEN_INVALID", "Invalid access token"),
                    status_code=status.HTTP_403_FORBIDDEN,
                )

        if not refresh_token:
            logger.warning("Access token expired and no refresh token present")
            raise ClientError(
                Error("TOKEN_EXPIRED", "Access token expired and no refresh token available"),
                status_code=status.HTTP_403_FORBIDDEN,
            )

        use_case = RefreshAccessTokenUseCase(self.uow, self.token_service)
        refreshed = await use_case.execute(refresh_token)
        if refreshed.is_err():
            error = refreshed.error
            if error.code not in REFRESH_FAILURE_CODES:
                raise ServerError(error)
            logger.warning(f"Refresh token rejected: {error.code}")
            raise ClientError(
                Error(error.code, "Refresh token expired or invalid"),
                status_code=status.HTTP_403_FORBIDDEN,
            )

        value = refreshed.value
        set_access_cookie(
            response, value.access_token, self.token_service.access_ttl, self.cookie_secure
        )
        return AuthenticatedPrincipal(**value.user.model_dump())
