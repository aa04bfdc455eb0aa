"""
Session Use Cases

Session ledger reporting and retention.
"""

from .get_session_report_use_case import GetSessionReportUseCase
from .purge_sessions_use_case import PurgeSessionsUseCase
from .dtos import DailySessionEntry, PurgeSessionsResponse, SessionReportResponse

__all__ = [
    "GetSessionReportUseCase",
    "PurgeSessionsUseCase",
    "DailySessionEntry",
    "PurgeSessionsResponse",
    "SessionReportResponse",
]
