from datetime import timedelta

import pytest
from httpx import AsyncClient

from tillauth.domain.base import utc_now
from tillauth.domain.entities import UserSession

ADMIN_EMAIL = "owner@shop.com"
ADMIN_PASSWORD = "OwnerPass123!"


async def admin_headers(client: AsyncClient):
    response = await client.post(
        "/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    client.cookies.clear()
    return {"Authorization": f"Bearer {response.json()['accessToken']}"}


@pytest.mark.asyncio
async def test_report_requires_authentication(client: AsyncClient):
    response = await client.get("/sessions/report")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "MISSING_CREDENTIALS"


@pytest.mark.asyncio
async def test_report_requires_admin(client: AsyncClient):
    await client.post("/auth/register", json={"email": "cashier@shop.com", "password": "SecurePass123!"})
    login = await client.post(
        "/auth/login", json={"email": "cashier@shop.com", "password": "SecurePass123!"}
    )
    client.cookies.clear()

    response = await client.get(
        "/sessions/report", headers={"Authorization": f"Bearer {login.json()['accessToken']}"}
    )

    assert response.status_code == 403
    assert response.json()["error"] == {"code": "FORBIDDEN", "message": "Access denied: Admins only"}


@pytest.mark.asyncio
async def test_report_merges_overlaps_and_sorts(client: AsyncClient, db_session, admin_user):
    """
    Given two devices with overlapping sessions two days ago
    And a second cashier with one closed session the same day
    When the admin requests the report
    Then overlapping time is counted once
    And entries are ordered by date descending, then email ascending
    """
    two_days_ago = (utc_now() - timedelta(days=2)).replace(hour=9, minute=0, second=0, microsecond=0)
    db_session.add_all(
        [
            UserSession(
                user_email="zoe@shop.com",
                login_time=two_days_ago,
                logout_time=two_days_ago + timedelta(hours=1),
                duration_minutes=60,
            ),
            UserSession(
                user_email="zoe@shop.com",
                login_time=two_days_ago + timedelta(minutes=30),
                logout_time=two_days_ago + timedelta(hours=2),
                duration_minutes=90,
            ),
            UserSession(
                user_email="amy@shop.com",
                login_time=two_days_ago + timedelta(hours=5),
                logout_time=two_days_ago + timedelta(hours=5, minutes=45),
                duration_minutes=45,
            ),
        ]
    )
    await db_session.commit()

    response = await client.get("/sessions/report", headers=await admin_headers(client))

    assert response.status_code == 200
    data = response.json()
    today = utc_now().date()
    assert data["date"] == today.isoformat()

    past_day = two_days_ago.date().isoformat()
    past = [entry for entry in data["sessions"] if entry["date"] == past_day]
    assert past == [
        {"user_email": "amy@shop.com", "date": past_day, "totalDuration": 45, "status": "Logged Out"},
        {"user_email": "zoe@shop.com", "date": past_day, "totalDuration": 120, "status": "Logged Out"},
    ]

    # The admin's own login is open today
    assert data["sessions"][0]["date"] == today.isoformat()
    assert data["sessions"][0]["user_email"] == ADMIN_EMAIL
    assert data["sessions"][0]["status"] == "Active"

    dates = [entry["date"] for entry in data["sessions"]]
    assert dates == sorted(dates, reverse=True)


@pytest.mark.asyncio
async def test_report_purges_expired_records(client: AsyncClient, db_session, admin_user):
    db_session.add(
        UserSession(
            user_email="old@shop.com",
            login_time=utc_now() - timedelta(days=400),
            logout_time=utc_now() - timedelta(days=400) + timedelta(minutes=10),
            duration_minutes=10,
        )
    )
    await db_session.commit()

    headers = await admin_headers(client)
    response = await client.get("/sessions/report", headers=headers)
    assert response.status_code == 200
    assert all(entry["user_email"] != "old@shop.com" for entry in response.json()["sessions"])

    # Already purged, nothing left for an explicit purge
    purge = await client.post("/sessions/purge", json={"retention_days": 90}, headers=headers)
    assert purge.status_code == 200
    assert purge.json()["purged_count"] == 0


@pytest.mark.asyncio
async def test_purge_sessions(client: AsyncClient, db_session, admin_user):
    db_session.add(
        UserSession(user_email="cashier@shop.com", login_time=utc_now() - timedelta(days=40))
    )
    await db_session.commit()

    headers = await admin_headers(client)
    response = await client.post("/sessions/purge", json={"retention_days": 30}, headers=headers)

    assert response.status_code == 200
    assert response.json()["purged_count"] == 1


@pytest.mark.asyncio
async def test_purge_rejects_invalid_retention(client: AsyncClient, admin_user):
    headers = await admin_headers(client)
    response = await client.post("/sessions/purge", json={"retention_days": 0}, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_RETENTION"
