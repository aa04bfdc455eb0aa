import bcrypt
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tillauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tillauth.depends import get_unit_of_work
from tillauth.domain.base import utc_now
from tillauth.domain.entities import User, UserRole

ADMIN_EMAIL = "owner@shop.com"
ADMIN_PASSWORD = "OwnerPass123!"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session):
    from tillauth.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)
    # Cheap hashes keep the suite fast
    app.state.bcrypt_rounds = 4

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    return app


@pytest_asyncio.fixture
async def client(app):
    from httpx import ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def admin_user(db_session):
    """Admins are provisioned out of band, so insert one directly"""
    now = utc_now()
    admin = User(
        email=ADMIN_EMAIL,
        password_hash=bcrypt.hashpw(ADMIN_PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
        role=UserRole.admin,
        created_at=now,
        updated_at=now,
    )
    db_session.add(admin)
    await db_session.commit()
    await db_session.refresh(admin)
    return admin
