"""
Session Reporting DTOs
"""

from typing import List

from pydantic import BaseModel


class DailySessionEntry(BaseModel):
    """Logged-in time for one user on one day"""

    user_email: str
    date: str
    totalDuration: int  # minutes
    status: str


class SessionReportResponse(BaseModel):
    """Response for session report use case"""

    date: str
    sessions: List[DailySessionEntry]


class PurgeSessionsResponse(BaseModel):
    """Response for purge sessions use case"""

    purged_count: int
    cutoff: str
