"""Completion metrics bucketed by local day or Monday-start week."""
import logging
from collections import Counter
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

from gsd.exceptions import InvariantViolation
from gsd.repositories import tasks as tasks_repo
from gsd.schemas import DailyMetric, DailyMetricsResponse, WeeklyMetric, WeeklyMetricsResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"
DEFAULT_DAILY_RANGE_DAYS = 30
DEFAULT_WEEKLY_RANGE_DAYS = 84
MAX_RANGE_DAYS = 365


def resolve_timezone(name: Optional[str]) -> ZoneInfo:
    try:
        return ZoneInfo(name or DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError):
        raise InvariantViolation(f"Invalid timezone: {name}")


def parse_date(value: Optional[str], field: str) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvariantViolation(f"Invalid {field}: expected YYYY-MM-DD")


def resolve_range(
    start: Optional[str], end: Optional[str], tz: ZoneInfo, default_days: int
) -> Tuple[date, date]:
    end_date = parse_date(end, "end_date") or datetime.now(tz).date()
    start_date = parse_date(start, "start_date") or end_date - timedelta(days=default_days)
    if start_date > end_date:
        raise InvariantViolation("start_date must be before or equal to end_date")
    if (end_date - start_date).days > MAX_RANGE_DAYS:
        raise InvariantViolation(f"Date range cannot exceed {MAX_RANGE_DAYS} days")
    return start_date, end_date


def local_day_bounds(start_date: date, end_date: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """UTC instants covering ``start_date`` 00:00 through ``end_date`` 23:59:59 local time."""
    start = datetime.combine(start_date, time.min, tzinfo=tz)
    end = datetime.combine(end_date, time.max, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def _local_date(completed_at: datetime, tz: ZoneInfo) -> date:
    # SQLite hands back naive datetimes; they are stored in UTC.
    if completed_at.tzinfo is None:
        completed_at = completed_at.replace(tzinfo=timezone.utc)
    return completed_at.astimezone(tz).date()


def _completion_dates(db: Session, user_id: str, start_date: date, end_date: date, tz: ZoneInfo) -> Counter:
    start, end = local_day_bounds(start_date, end_date, tz)
    tasks = tasks_repo.find_completed_between(db, user_id, start, end)
    counts = Counter(_local_date(task.completed_at, tz) for task in tasks)
    # Naive SQLite comparisons can let boundary rows through.
    return Counter({day: n for day, n in counts.items() if start_date <= day <= end_date})


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def get_daily_metrics(
    db: Session,
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    timezone_name: Optional[str] = None,
) -> DailyMetricsResponse:
    tz = resolve_timezone(timezone_name)
    start, end = resolve_range(start_date, end_date, tz, DEFAULT_DAILY_RANGE_DAYS)
    counts = _completion_dates(db, user_id, start, end, tz)

    metrics = []
    day = start
    while day <= end:
        metrics.append(DailyMetric(date=day, count=counts.get(day, 0), timezone=tz.key))
        day += timedelta(days=1)

    return DailyMetricsResponse(
        metrics=metrics,
        start_date=start,
        end_date=end,
        timezone=tz.key,
        total_completed=sum(counts.values()),
    )


def get_weekly_metrics(
    db: Session,
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    timezone_name: Optional[str] = None,
) -> WeeklyMetricsResponse:
    tz = resolve_timezone(timezone_name)
    start, end = resolve_range(start_date, end_date, tz, DEFAULT_WEEKLY_RANGE_DAYS)
    counts = _completion_dates(db, user_id, start, end, tz)

    per_week = Counter()
    for day, count in counts.items():
        per_week[week_start(day)] += count

    metrics = []
    monday = week_start(start)
    while monday <= end:
        metrics.append(
            WeeklyMetric(
                week_start_date=monday,
                week_end_date=monday + timedelta(days=6),
                count=per_week.get(monday, 0),
                timezone=tz.key,
            )
        )
        monday += timedelta(weeks=1)

    return WeeklyMetricsResponse(
        metrics=metrics,
        start_date=start,
        end_date=end,
        timezone=tz.key,
        total_completed=sum(counts.values()),
        total_weeks=len(metrics),
    )
