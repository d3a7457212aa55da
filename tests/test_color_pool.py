import pytest

from gsd.core.color_pool import COLOR_PALETTE, DEFAULT_TASK_COLOR, ColorPool, normalize_color, scan_used_colors
from gsd.exceptions import CapacityExceeded, Conflict, InvariantViolation
from gsd.models import TaskList


def test_allocate_hands_out_palette_in_order(pool):
    assert pool.allocate("u1") == COLOR_PALETTE[0]
    assert pool.allocate("u1") == COLOR_PALETTE[1]
    assert DEFAULT_TASK_COLOR == "#3B82F6"


def test_colors_are_tracked_per_user(pool):
    pool.allocate("u1")
    assert pool.allocate("u2") == COLOR_PALETTE[0]


def test_exhausted_palette_raises(pool):
    for _ in COLOR_PALETTE:
        pool.allocate("u1")
    with pytest.raises(CapacityExceeded) as exc:
        pool.allocate("u1")
    assert exc.value.detail == "No colors available in pool"


def test_release_makes_color_available_again(pool):
    color = pool.allocate("u1")
    pool.release("u1", color)
    assert color in pool.available("u1")
    pool.release("u1", None)


def test_mark_used_rejects_taken_and_foreign_colors(pool):
    pool.mark_used("u1", "#ef4444")
    with pytest.raises(Conflict) as exc:
        pool.mark_used("u1", "#EF4444")
    assert exc.value.status_code == 409

    with pytest.raises(InvariantViolation):
        pool.mark_used("u1", "#123456")


def test_normalize_color():
    assert normalize_color("#3b82f6") == "#3B82F6"
    with pytest.raises(InvariantViolation):
        normalize_color("#000000")


def test_scan_rebuilds_pool_from_backlogs(db_session, user, other_user):
    db_session.add_all(
        [
            TaskList(user_id=user.id, name="A", order_index=1000, is_backlog=True, color="#EF4444"),
            TaskList(user_id=user.id, name="B", order_index=2000, is_backlog=False, color="#10B981"),
            TaskList(user_id=user.id, name="C", order_index=3000, is_backlog=True, color="#bogus1"),
            TaskList(user_id=other_user.id, name="D", order_index=1000, is_backlog=True, color="#EF4444"),
        ]
    )
    db_session.commit()

    pool = ColorPool()
    assert scan_used_colors(db_session, pool) == 2
    assert "#EF4444" not in pool.available(user.id)
    assert "#10B981" in pool.available(user.id)
    assert "#EF4444" not in pool.available(other_user.id)
