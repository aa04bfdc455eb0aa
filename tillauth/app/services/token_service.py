"""
Token Service

Issues and verifies the signed access/refresh token pair. Only this service
mints tokens. Refresh tokens are additionally checked against the revocation
cache: a refresh token is trusted only while it is the exact value cached for
its principal.
"""

import logging
from datetime import timedelta

from pydantic import BaseModel, ValidationError

from libs.result import Error, Result, Return
from tillauth.api.utils.jwt import create_token, verify_jwt
from tillauth.app.services.revocation_cache import IRevocationCache, refresh_token_key

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class AccessClaims(BaseModel):
    """Claims carried by an access token"""

    id: int
    email: str
    role: str


class RefreshClaims(BaseModel):
    """Claims carried by a refresh token"""

    id: int
    email: str


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str


class TokenService:
    def __init__(
        self,
        secret: str,
        cache: IRevocationCache,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
        algorithm: str = "HS256",
    ):
        self.secret = secret
        self.cache = cache
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl
        self.algorithm = algorithm

    def issue(self, user_id: int, email: str, role: str) -> TokenPair:
        """Mint a new access/refresh pair. The caller registers the refresh token."""
        refresh_claims = {"id": user_id, "email": email, "type": REFRESH_TOKEN_TYPE}
        return TokenPair(
            access_token=self.issue_access(user_id, email, role),
            refresh_token=create_token(
                refresh_claims, self.refresh_ttl, self.secret, self.algorithm
            ),
        )

    def issue_access(self, user_id: int, email: str, role: str) -> str:
        claims = {"id": user_id, "email": email, "role": role, "type": ACCESS_TOKEN_TYPE}
        return create_token(claims, self.access_ttl, self.secret, self.algorithm)

    def verify_access(self, token: str) -> Result[AccessClaims]:
        return self._decode(token, ACCESS_TOKEN_TYPE, AccessClaims)

    async def verify_refresh(self, token: str) -> Result[RefreshClaims]:
        """
        Verify signature and expiry, then require the cached refresh token for
        the embedded email to be this exact string.
        """
        result = self._decode(token, REFRESH_TOKEN_TYPE, RefreshClaims)
        if result.is_err():
            return result

        claims = result.value
        cached = await self.cache.get(refresh_token_key(claims.email))
        if cached is None or cached != token:
            logger.warning(f"Refresh token for {claims.email} is not the cached one")
            return Return.err(Error("TOKEN_REVOKED", "Refresh token has been revoked"))

        return Return.ok(claims)

    async def register_refresh(self, email: str, refresh_token: str) -> None:
        """Make refresh_token the one trusted refresh token for email"""
        ttl = int(self.refresh_ttl.total_seconds())
        await self.cache.set(refresh_token_key(email), refresh_token, ttl=ttl)

    async def revoke_refresh(self, email: str) -> None:
        await self.cache.delete(refresh_token_key(email))

    def _decode(self, token: str, token_type: str, model):
        result = verify_jwt(token, self.secret, self.algorithm)
        if result.is_err():
            return result

        payload = result.value
        if payload.get("type") != token_type:
            return Return.err(Error("TOKEN_INVALID", "Token is invalid"))
        try:
            return Return.ok(model.model_validate(payload))
        except ValidationError:
            return Return.err(Error("TOKEN_INVALID", "Token is invalid"))
