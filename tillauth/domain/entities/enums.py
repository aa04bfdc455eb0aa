"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role carried in access tokens"""

    user = "user"
    admin = "admin"
