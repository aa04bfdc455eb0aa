"""
User Management DTOs
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel


class UserSummary(BaseModel):
    id: int
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class ListUsersResponse(BaseModel):
    success: bool
    users: List[UserSummary]


class DeleteUserResponse(BaseModel):
    success: bool
    message: str
    deleted_sessions: int
