"""
Activity Classifier

Turns one principal's merged intervals into per-day totals and a status.
Day boundaries are local midnights in a configured reference time zone.

Duration comes from the merged intervals clipped to the day; status comes from
the raw records, because it asks whether anything is still open rather than
how much time was covered.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from .interval_merger import MergedInterval, merge_sessions


class ActivityStatus(str, Enum):
    active = "Active"
    logged_out = "Logged Out"


@dataclass(frozen=True)
class DailyActivity:
    user_email: str
    day: date
    total_duration: timedelta
    status: ActivityStatus

    @property
    def total_minutes(self) -> int:
        return int(self.total_duration.total_seconds() // 60)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are stored UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def local_date(value: datetime, tz: tzinfo) -> date:
    return as_utc(value).astimezone(tz).date()


def day_bounds(day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """[local midnight, next local midnight) as aware datetimes"""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def _effective_end(interval: MergedInterval, now: datetime) -> datetime:
    if interval.end is None:
        return max(as_utc(interval.start), now)
    return as_utc(interval.end)


def clipped_duration(
    intervals: Iterable[MergedInterval], start: datetime, end: datetime, now: datetime
) -> timedelta:
    """Total time the intervals cover inside [start, end); open ends stop at now"""
    now = as_utc(now)
    total = timedelta(0)
    for interval in intervals:
        lower = max(as_utc(interval.start), as_utc(start))
        upper = min(_effective_end(interval, now), as_utc(end))
        if upper > lower:
            total += upper - lower
    return total


def days_touched(
    intervals: Iterable[MergedInterval], tz: tzinfo, now: datetime
) -> List[date]:
    """Local days covered by at least one interval, ascending"""
    now = as_utc(now)
    days = set()
    for interval in intervals:
        start = as_utc(interval.start)
        end = _effective_end(interval, now)
        if end > start:
            # [start, end) does not reach into the day that begins exactly at end
            end = end - timedelta(microseconds=1)
        day = local_date(start, tz)
        last = local_date(end, tz)
        while day <= last:
            days.add(day)
            day += timedelta(days=1)
    return sorted(days)


def classify_status(records: Sequence, day: date, today: date, tz: tzinfo) -> ActivityStatus:
    """
    Today: Active iff any raw record for the user is still open.
    Past day: Logged Out iff every record logged on that day is closed.

    A past day with a record that was never closed reports Active, which also
    covers abandoned sessions; kept as-is until product decides otherwise.
    """
    if day == today:
        if any(record.logout_time is None for record in records):
            return ActivityStatus.active
        return ActivityStatus.logged_out

    that_day = [record for record in records if local_date(record.login_time, tz) == day]
    if all(record.logout_time is not None for record in that_day):
        return ActivityStatus.logged_out
    return ActivityStatus.active


def classify_day(
    user_email: str,
    day: date,
    intervals: Sequence[MergedInterval],
    records: Sequence,
    tz: tzinfo,
    now: datetime,
) -> DailyActivity:
    start, end = day_bounds(day, tz)
    today = as_utc(now).astimezone(tz).date()
    return DailyActivity(
        user_email=user_email,
        day=day,
        total_duration=clipped_duration(intervals, start, end, now),
        status=classify_status(records, day, today, tz),
    )


def classify_principal(
    user_email: str,
    records: Sequence,
    tz: tzinfo,
    now: datetime,
    first_day: Optional[date] = None,
) -> List[DailyActivity]:
    """One DailyActivity per local day the principal's activity touches"""
    intervals = merge_sessions(records)
    today = as_utc(now).astimezone(tz).date()
    return [
        classify_day(user_email, day, intervals, records, tz, now)
        for day in days_touched(intervals, tz, now)
        if day <= today and (first_day is None or day >= first_day)
    ]
