from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import ExpiredSignatureError, JWTError, jwt

from libs.result import Error, Result, Return


def create_token(
    claims: dict, expires_delta: timedelta, secret: str, algorithm: str = "HS256"
) -> str:
    """
    Create a signed JWT with custom expiry

    Args:
        claims: Application claims to embed
        expires_delta: Token expiration duration
        secret: Signing secret
        algorithm: JWS algorithm

    Returns:
        JWT token string carrying claims plus exp, iat and a random jti
    """
    now = datetime.now(UTC)
    payload = {
        **claims,
        "exp": now + expires_delta,
        "iat": now,
        "jti": uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_jwt(token: str, secret: str, algorithm: str = "HS256") -> Result[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string
        secret: Signing secret
        algorithm: Expected JWS algorithm

    Returns:
        Result with decoded payload, or Error TOKEN_EXPIRED / TOKEN_INVALID
    """
    if not token:
        return Return.err(Error("TOKEN_INVALID", "Token is missing"))
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
    except ExpiredSignatureError:
        return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))
    except JWTError:
        return Return.err(Error("TOKEN_INVALID", "Token is invalid"))
    return Return.ok(payload)
