"""
Purge Sessions Use Case

Applies the session retention policy on demand.
"""

from datetime import datetime, timedelta
from typing import Optional

from libs.result import Error, Result, Return
from tillauth.app.services.session_ledger import SessionLedger
from tillauth.app.services.unit_of_work import UnitOfWork
from tillauth.domain.base import utc_now
from .dtos import PurgeSessionsResponse


class PurgeSessionsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, retention_days: int, now: Optional[datetime] = None
    ) -> Result[PurgeSessionsResponse]:
        if retention_days < 1:
            return Return.err(
                Error("INVALID_RETENTION", "Retention must be at least one day")
            )

        cutoff = (now or utc_now()) - timedelta(days=retention_days)

        async with self.uow:
            ledger = SessionLedger(self.uow.user_sessions)
            count = await ledger.purge_older_than(cutoff)
            await self.uow.commit()

        return Return.ok(PurgeSessionsResponse(purged_count=count, cutoff=cutoff.isoformat()))
