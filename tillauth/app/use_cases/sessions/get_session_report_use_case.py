"""
Get Session Report Use Case

Builds the per-user, per-day activity report for the lookback window.
"""

import logging
from collections import defaultdict
from datetime import UTC, datetime, timedelta, tzinfo
from typing import Dict, List, Optional

from libs.result import Result, Return
from tillauth.app.services.activity_classifier import as_utc, classify_principal
from tillauth.app.services.session_ledger import SessionLedger
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.entities import UserSession
from .dtos import DailySessionEntry, SessionReportResponse

logger = logging.getLogger(__name__)


class GetSessionReportUseCase:
    """
    Use case for the session activity report.

    Business Rules:
    - Records older than the retention window are purged before reading
    - Only records logged in within the lookback window are considered
    - Each user's records are merged into intervals, then split per local day
    - One entry per (user, day), sorted by date descending then email ascending
    """

    def __init__(
        self,
        uow: UnitOfWork,
        tz: tzinfo,
        lookback_days: int = 7,
        retention_days: int = 90,
    ):
        self.uow = uow
        self.tz = tz
        self.lookback_days = lookback_days
        # Purging must never cut into the window being reported
        self.retention_days = max(retention_days, lookback_days)

    async def execute(self, now: Optional[datetime] = None) -> Result[SessionReportResponse]:
        now = as_utc(now) if now else datetime.now(UTC)
        naive_now = now.replace(tzinfo=None)
        lookback_cutoff = naive_now - timedelta(days=self.lookback_days)
        retention_cutoff = naive_now - timedelta(days=self.retention_days)

        async with self.uow:
            ledger = SessionLedger(self.uow.user_sessions)
            purged = await ledger.purge_older_than(retention_cutoff)
            if purged:
                await self.uow.commit()
            records = await self.uow.user_sessions.list_since(lookback_cutoff)

        by_user: Dict[str, List[UserSession]] = defaultdict(list)
        for record in records:
            by_user[record.user_email].append(record)

        first_day = as_utc(lookback_cutoff).astimezone(self.tz).date()
        entries = []
        for email, user_records in by_user.items():
            for activity in classify_principal(email, user_records, self.tz, now, first_day):
                entries.append(
                    DailySessionEntry(
                        user_email=email,
                        date=activity.day.isoformat(),
                        totalDuration=activity.total_minutes,
                        status=activity.status.value,
                    )
                )

        # date descending, then email ascending
        entries.sort(key=lambda entry: entry.user_email)
        entries.sort(key=lambda entry: entry.date, reverse=True)

        logger.info(
            f"Session report: {len(records)} record(s), {len(by_user)} user(s), "
            f"{len(entries)} entries"
        )
        return Return.ok(
            SessionReportResponse(
                date=now.astimezone(self.tz).date().isoformat(),
                sessions=entries,
            )
        )
