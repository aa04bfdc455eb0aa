"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
"""

from pydantic import BaseModel


class UserInfo(BaseModel):
    """Principal information in authentication responses"""

    id: int
    email: str
    role: str


class RegisterResponse(BaseModel):
    """Response for register use case"""

    success: bool
    userId: int
    role: str


class LoginResult(BaseModel):
    """
    Result of the login use case.

    Carries the refresh token so the API layer can set it as a cookie; it is
    never returned in a response body.
    """

    user: UserInfo
    access_token: str
    refresh_token: str
    session_id: int


class LoginResponse(BaseModel):
    """HTTP body for a successful login"""

    success: bool
    user: UserInfo
    accessToken: str


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    success: bool
    message: str
    duration: str


class RefreshedAccess(BaseModel):
    """New access token minted from a refresh token"""

    access_token: str
    user: UserInfo


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    success: bool
    message: str
