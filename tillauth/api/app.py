import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from zoneinfo import ZoneInfo

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from tillauth.app.services.revocation_cache import IRevocationCache, StoreUnavailableError
from tillauth.app.services.token_service import TokenService
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_store_unavailable(request: Request, exc: Exception):
    error_dict = {"code": "STORE_UNAVAILABLE", "message": "Internal server error"}
    logger.error(f"Store unavailable: {exc.__class__.__name__}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_revocation_cache(ApplicationConfig) -> IRevocationCache:
    if ApplicationConfig.CACHE_BACKEND == "redis":
        from tillauth.adapter.services.redis_revocation_cache import RedisRevocationCache

        return RedisRevocationCache(
            ApplicationConfig.REDIS_URL,
            socket_timeout=ApplicationConfig.CACHE_TIMEOUT_SECONDS,
        )

    from tillauth.adapter.services.memory_revocation_cache import MemoryRevocationCache

    return MemoryRevocationCache()


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(level=ApplicationConfig.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.DB_AUTO_CREATE:
            from tillauth.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        await app.state.revocation_cache.close()

    app = FastAPI(title="tillauth", version="0.1.0", lifespan=lifespan)

    # Composition root: one cache and one token service per process
    revocation_cache = build_revocation_cache(ApplicationConfig)
    app.state.revocation_cache = revocation_cache
    app.state.token_service = TokenService(
        secret=ApplicationConfig.JWT_SECRET,
        cache=revocation_cache,
        access_ttl=timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
        refresh_ttl=timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRE_DAYS),
        algorithm=ApplicationConfig.JWT_ALGORITHM,
    )
    app.state.cookie_secure = ApplicationConfig.COOKIE_SECURE
    app.state.bcrypt_rounds = ApplicationConfig.BCRYPT_ROUNDS
    app.state.reference_tz = ZoneInfo(ApplicationConfig.REFERENCE_TIMEZONE)
    app.state.session_lookback_days = ApplicationConfig.SESSION_LOOKBACK_DAYS
    app.state.session_retention_days = ApplicationConfig.SESSION_RETENTION_DAYS

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tillauth.api.routes import auth, health_check, sessions, users

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(users.router, tags=["Users"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StoreUnavailableError, handle_store_unavailable)
    app.add_exception_handler(SQLAlchemyError, handle_store_unavailable)

    return app
