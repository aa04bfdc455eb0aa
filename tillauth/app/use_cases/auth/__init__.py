"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_access_token_use_case import RefreshAccessTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    UserInfo,
    RegisterResponse,
    LoginResult,
    LoginResponse,
    LogoutResponse,
    RefreshedAccess,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshAccessTokenUseCase",
    "ResetPasswordUseCase",
    # DTOs
    "UserInfo",
    "RegisterResponse",
    "LoginResult",
    "LoginResponse",
    "LogoutResponse",
    "RefreshedAccess",
    "ResetPasswordResponse",
]
