from datetime import datetime, timedelta, timezone

from gsd.jobs.retention import RetentionJob
from gsd.models import Task
from tests.conftest import TestingSessionLocal, make_user


def _complete_many(session, user, lists, count):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for index in range(count):
        session.add(
            Task(
                user_id=user.id,
                list_id=lists["Done"].id,
                origin_backlog_id=lists["Backlog"].id,
                title=f"task {index}",
                order_index=1000 * (index + 1),
                completed_at=base + timedelta(hours=index),
            )
        )
    session.commit()


def test_retention_keeps_most_recent_completed_tasks(db_session, user, onboarded):
    _complete_many(db_session, user, onboarded, 5)
    open_task = Task(
        user_id=user.id,
        list_id=onboarded["Backlog"].id,
        origin_backlog_id=onboarded["Backlog"].id,
        title="open",
        order_index=1000,
    )
    db_session.add(open_task)
    db_session.commit()

    deleted = RetentionJob(session_factory=TestingSessionLocal, limit=3).run()
    assert deleted == {user.id: 2}

    db_session.expire_all()
    remaining = db_session.query(Task).filter(Task.completed_at.isnot(None)).all()
    assert sorted(task.title for task in remaining) == ["task 2", "task 3", "task 4"]
    assert db_session.query(Task).filter(Task.title == "open").count() == 1


def test_retention_skips_users_under_the_limit(db_session, user, onboarded):
    _complete_many(db_session, user, onboarded, 3)
    make_user(db_session, google_id="google-carol", email="carol@example.com")

    assert RetentionJob(session_factory=TestingSessionLocal, limit=3).run() == {}
