"""
Domain Entities

All domain entities organized by model.
"""

from .enums import UserRole
from .user import User
from .user_session import UserSession

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "UserSession",
]
