import logging

from sqlalchemy.orm import Session

from gsd.core.color_pool import ColorPool
from gsd.core.order_index import calculate_top_position
from gsd.models import User
from gsd.repositories import lists as lists_repo

logger = logging.getLogger(__name__)

DEFAULT_BACKLOG_NAME = "Backlog"
DEFAULT_INTERMEDIATE_NAME = "Today"
DONE_LIST_NAME = "Done"


def onboard_user(db: Session, user: User, pool: ColorPool) -> bool:
    """Give a user without lists the default Backlog, Today and Done lists.

    Returns ``False`` when the user already has lists.
    """
    if lists_repo.count_by_user(db, user.id, include_done=True) > 0:
        return False

    color = pool.allocate(user.id)
    try:
        for name, is_backlog, is_done in (
            (DEFAULT_BACKLOG_NAME, True, False),
            (DEFAULT_INTERMEDIATE_NAME, False, False),
            (DONE_LIST_NAME, False, True),
        ):
            lists_repo.create(
                db,
                user_id=user.id,
                name=name,
                order_index=calculate_top_position(lists_repo.find_max_order_index(db, user.id)),
                is_backlog=is_backlog,
                is_done=is_done,
                color=color if is_backlog else None,
            )
        db.commit()
    except Exception:
        db.rollback()
        pool.release(user.id, color)
        raise

    logger.info("Onboarded user %s with default lists", user.id)
    return True
