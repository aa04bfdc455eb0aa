"""
User Management Use Cases

All user-related business logic.
"""

from .list_users_use_case import ListUsersUseCase
from .delete_user_use_case import DeleteUserUseCase
from .dtos import DeleteUserResponse, ListUsersResponse, UserSummary

__all__ = [
    "ListUsersUseCase",
    "DeleteUserUseCase",
    "DeleteUserResponse",
    "ListUsersResponse",
    "UserSummary",
]
