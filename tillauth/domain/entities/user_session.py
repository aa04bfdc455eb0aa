"""
User Session Entity

One login/logout record in the session ledger.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tillauth.domain.base import utc_now


class UserSession(SQLModel, table=True):
    """
    UserSession entity - a login, and later its logout.

    Business Rules:
    - Created on login with logout_time = None (open)
    - Closed at most once, by logout, which sets logout_time and duration_minutes
    - Several open records per user are legal (multiple devices)
    - Timestamps are naive UTC
    """

    __tablename__ = "user_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_email: str = Field(max_length=255, nullable=False)

    login_time: datetime = Field(sa_column=Column(DateTime, nullable=False))
    logout_time: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    duration_minutes: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_session_email_login", "user_email", "login_time"),
        Index("idx_user_session_login_time", "login_time"),
    )
