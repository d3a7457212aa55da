from datetime import datetime, timezone

import pytest
from fastapi import HTTPException
from sqlalchemy.orm import Session

import gsd.api.v1.done as done_routes
import gsd.api.v1.metrics as metrics_routes
from gsd.models import Task, User


def _completed_task(session: Session, user: User, lists: dict, title: str, completed_at: datetime) -> Task:
    task = Task(
        user_id=user.id,
        list_id=lists["Done"].id,
        origin_backlog_id=lists["Backlog"].id,
        title=title,
        order_index=1000,
        completed_at=completed_at,
    )
    session.add(task)
    session.commit()
    return task


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_done_view_lists_newest_completion_first(db_session, user, onboarded):
    _completed_task(db_session, user, onboarded, "old", _utc(2024, 1, 1, 9))
    _completed_task(db_session, user, onboarded, "new", _utc(2024, 1, 3, 9))
    _completed_task(db_session, user, onboarded, "middle", _utc(2024, 1, 2, 9))

    page = done_routes.get_done(50, 0, db_session, user)
    assert [task.title for task in page.tasks] == ["new", "middle", "old"]
    assert page.total == 3
    assert page.tasks[0].list_name == "Done"
    assert page.tasks[0].color == "#3B82F6"

    page = done_routes.get_done(1, 1, db_session, user)
    assert [task.title for task in page.tasks] == ["middle"]
    assert page.limit == 1 and page.offset == 1


def test_done_view_is_scoped_to_user(db_session, user, other_user, onboarded):
    _completed_task(db_session, user, onboarded, "mine", _utc(2024, 1, 1, 9))
    page = done_routes.get_done(50, 0, db_session, other_user)
    assert page.tasks == []
    assert page.total == 0


def test_daily_metrics_bucket_by_local_date(db_session, user, onboarded):
    _completed_task(db_session, user, onboarded, "evening", _utc(2024, 3, 10, 10))
    _completed_task(db_session, user, onboarded, "after midnight in Tokyo", _utc(2024, 3, 10, 16))

    result = metrics_routes.get_daily_metrics("2024-03-10", "2024-03-12", "Asia/Tokyo", db_session, user)
    assert [(metric.date.isoformat(), metric.count) for metric in result.metrics] == [
        ("2024-03-10", 1),
        ("2024-03-11", 1),
        ("2024-03-12", 0),
    ]
    assert result.total_completed == 2
    assert result.timezone == "Asia/Tokyo"

    result = metrics_routes.get_daily_metrics("2024-03-10", "2024-03-12", "UTC", db_session, user)
    assert [metric.count for metric in result.metrics] == [2, 0, 0]


def test_daily_metrics_default_range_is_thirty_days(db_session, user, onboarded):
    result = metrics_routes.get_daily_metrics(None, None, None, db_session, user)
    assert len(result.metrics) == 31
    assert result.timezone == "UTC"
    assert result.total_completed == 0
    assert all(metric.count == 0 for metric in result.metrics)


def test_weekly_metrics_start_on_monday(db_session, user, onboarded):
    _completed_task(db_session, user, onboarded, "before range", _utc(2024, 3, 5, 10))
    _completed_task(db_session, user, onboarded, "sunday", _utc(2024, 3, 10, 10))
    _completed_task(db_session, user, onboarded, "monday", _utc(2024, 3, 11, 10))

    result = metrics_routes.get_weekly_metrics("2024-03-06", "2024-03-20", "UTC", db_session, user)
    assert [(metric.week_start_date.isoformat(), metric.count) for metric in result.metrics] == [
        ("2024-03-04", 1),
        ("2024-03-11", 1),
        ("2024-03-18", 0),
    ]
    assert result.metrics[0].week_end_date.isoformat() == "2024-03-10"
    assert result.total_weeks == 3
    assert result.total_completed == 2


@pytest.mark.parametrize(
    "start_date,end_date,tz",
    [
        ("2024-03-12", "2024-03-10", "UTC"),
        ("2023-01-01", "2024-03-10", "UTC"),
        ("2024-03-01", "2024-03-10", "Mars/Olympus"),
        ("03/01/2024", "2024-03-10", "UTC"),
    ],
)
def test_metrics_reject_invalid_parameters(db_session, user, start_date, end_date, tz):
    with pytest.raises(HTTPException) as exc:
        metrics_routes.get_daily_metrics(start_date, end_date, tz, db_session, user)
    assert exc.value.status_code == 400
