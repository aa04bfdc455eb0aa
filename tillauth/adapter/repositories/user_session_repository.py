from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tillauth.app.repositories.user_session_repository import IUserSessionRepository
from tillauth.domain.entities import UserSession


class UserSessionRepository(IUserSessionRepository):
    """Session ledger repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user_session: UserSession) -> UserSession:
        self.session.add(user_session)
        await self.session.flush()
        await self.session.refresh(user_session)
        return user_session

    async def update(self, user_session: UserSession) -> UserSession:
        self.session.add(user_session)
        await self.session.flush()
        await self.session.refresh(user_session)
        return user_session

    async def get_latest_open_for_update(self, email: str) -> Optional[UserSession]:
        """
        Row lock keeps two concurrent logouts from closing the same record.
        SQLite has no FOR UPDATE; its database-level write lock serializes instead.
        """
        stmt = (
            select(UserSession)
            .where(UserSession.user_email == email, UserSession.logout_time.is_(None))
            .order_by(UserSession.login_time.desc(), UserSession.id.desc())
            .limit(1)
            .with_for_update()
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_since(self, cutoff: datetime) -> List[UserSession]:
        stmt = (
            select(UserSession)
            .where(UserSession.login_time >= cutoff)
            .order_by(UserSession.user_email, UserSession.login_time)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def delete_older_than(self, cutoff: datetime) -> int:
        stmt = delete(UserSession).where(UserSession.login_time < cutoff)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_email(self, email: str) -> int:
        stmt = delete(UserSession).where(UserSession.user_email == email)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
