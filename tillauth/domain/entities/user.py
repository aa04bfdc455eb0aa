"""
User Entity

A principal that can log in to the point-of-sale backend.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from tillauth.domain.base import utc_now
from .enums import UserRole


class User(SQLModel, table=True):
    """
    User entity - the credential store record for a principal.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash
    - Only password_hash and role change after creation
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    role: UserRole = Field(default=UserRole.user)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
