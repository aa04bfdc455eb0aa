from datetime import timedelta

from fastapi import Response

ACCESS_TOKEN_COOKIE = "accessToken"
REFRESH_TOKEN_COOKIE = "refreshToken"


def set_access_cookie(
    response: Response, access_token: str, max_age: timedelta, secure: bool
) -> None:
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        access_token,
        max_age=int(max_age.total_seconds()),
        httponly=True,
        samesite="strict",
        secure=secure,
    )


def set_refresh_cookie(
    response: Response, refresh_token: str, max_age: timedelta, secure: bool
) -> None:
    response.set_cookie(
        REFRESH_TOKEN_COOKIE,
        refresh_token,
        max_age=int(max_age.total_seconds()),
        httponly=True,
        samesite="strict",
        secure=secure,
    )


def clear_auth_cookies(response: Response, secure: bool) -> None:
    for name in (ACCESS_TOKEN_COOKIE, REFRESH_TOKEN_COOKIE):
        response.delete_cookie(name, httponly=True, samesite="strict", secure=secure)
