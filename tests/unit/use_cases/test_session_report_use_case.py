from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from tillauth.app.use_cases.sessions import GetSessionReportUseCase, PurgeSessionsUseCase
from tillauth.domain.entities import UserSession

NOW = datetime(2026, 3, 4, 12, 0, tzinfo=UTC)


def record(email, login, logout=None):
    return UserSession(user_email=email, login_time=login, logout_time=logout)


@pytest.mark.asyncio
async def test_report_groups_sorts_and_classifies(mock_uow):
    mock_uow.user_sessions.list_since.return_value = [
        record("zoe@shop.com", datetime(2026, 3, 3, 9, 0), datetime(2026, 3, 3, 10, 0)),
        record("amy@shop.com", datetime(2026, 3, 3, 14, 0), datetime(2026, 3, 3, 14, 45)),
        record("amy@shop.com", datetime(2026, 3, 4, 9, 0)),
    ]

    use_case = GetSessionReportUseCase(mock_uow, UTC, lookback_days=7, retention_days=90)
    result = await use_case.execute(now=NOW)

    assert result.is_ok()
    report = result.value
    assert report.date == "2026-03-04"
    assert [(e.date, e.user_email, e.totalDuration, e.status) for e in report.sessions] == [
        ("2026-03-04", "amy@shop.com", 180, "Active"),
        ("2026-03-03", "amy@shop.com", 45, "Logged Out"),
        ("2026-03-03", "zoe@shop.com", 60, "Logged Out"),
    ]
    mock_uow.user_sessions.list_since.assert_called_once_with(datetime(2026, 2, 25, 12, 0))


@pytest.mark.asyncio
async def test_report_purges_before_reading(mock_uow):
    calls = []
    mock_uow.user_sessions.delete_older_than.side_effect = lambda cutoff: calls.append(
        ("purge", cutoff)
    ) or 4
    mock_uow.user_sessions.list_since.side_effect = lambda cutoff: calls.append(
        ("read", cutoff)
    ) or []

    use_case = GetSessionReportUseCase(mock_uow, UTC, lookback_days=7, retention_days=30)
    result = await use_case.execute(now=NOW)

    assert result.value.sessions == []
    assert [name for name, _ in calls] == ["purge", "read"]
    assert calls[0][1] == datetime(2026, 2, 2, 12, 0)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_report_retention_never_shorter_than_lookback(mock_uow):
    mock_uow.user_sessions.list_since.return_value = []

    use_case = GetSessionReportUseCase(mock_uow, UTC, lookback_days=7, retention_days=1)
    await use_case.execute(now=NOW)

    mock_uow.user_sessions.delete_older_than.assert_called_once_with(
        NOW.replace(tzinfo=None) - timedelta(days=7)
    )
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_report_uses_reference_zone_for_days(mock_uow):
    # 22:30 UTC on the 3rd is already the 4th in Nairobi
    mock_uow.user_sessions.list_since.return_value = [
        record("amy@shop.com", datetime(2026, 3, 3, 22, 30), datetime(2026, 3, 3, 23, 0)),
    ]

    use_case = GetSessionReportUseCase(mock_uow, ZoneInfo("Africa/Nairobi"))
    result = await use_case.execute(now=NOW)

    assert [(e.date, e.totalDuration, e.status) for e in result.value.sessions] == [
        ("2026-03-04", 30, "Logged Out"),
    ]


@pytest.mark.asyncio
async def test_purge_sessions(mock_uow):
    mock_uow.user_sessions.delete_older_than.return_value = 12

    use_case = PurgeSessionsUseCase(mock_uow)
    result = await use_case.execute(30, now=datetime(2026, 3, 31, 0, 0))

    assert result.value.purged_count == 12
    assert result.value.cutoff == "2026-03-01T00:00:00"
    mock_uow.user_sessions.delete_older_than.assert_called_once_with(datetime(2026, 3, 1, 0, 0))
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_purge_sessions_rejects_zero_retention(mock_uow):
    use_case = PurgeSessionsUseCase(mock_uow)
    result = await use_case.execute(0)

    assert result.error.code == "INVALID_RETENTION"
    mock_uow.user_sessions.delete_older_than.assert_not_called()
