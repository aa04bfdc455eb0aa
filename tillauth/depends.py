from fastapi import Depends, Request, Response, status
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from tillauth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tillauth.api.error import ClientError
from tillauth.api.utils.auth_gate import AuthenticatedPrincipal, AuthGate
from tillauth.app.services.token_service import TokenService
from tillauth.domain.entities import UserRole

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def get_current_principal(
    request: Request,
    response: Response,
    uow=Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
) -> AuthenticatedPrincipal:
    """
    Dependency guarding protected routes.

    Returns:
        The authenticated principal (id, email, role)

    Raises:
        ClientError: 401 when no token is presented, 403 when tokens are
        expired, invalid or revoked
    """
    gate = AuthGate(uow, token_service, cookie_secure=request.app.state.cookie_secure)
    return await gate.authenticate(request, response)


async def require_admin(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
) -> AuthenticatedPrincipal:
    if principal.role.lower() != UserRole.admin.value:
        raise ClientError(
            Error("FORBIDDEN", "Access denied: Admins only"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return principal
