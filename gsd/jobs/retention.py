"""Daily pruning of the completed-task archive."""
import logging
from typing import Callable, Dict, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from gsd.config import settings
from gsd.database import SessionLocal
from gsd.repositories import tasks as tasks_repo

logger = logging.getLogger(__name__)

RETENTION_LIMIT = 500

scheduler: Optional[BackgroundScheduler] = None


class RetentionJob:
    """Keep only the ``limit`` most recently completed tasks of every user."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal, limit: int = RETENTION_LIMIT):
        self.session_factory = session_factory
        self.limit = limit

    def run(self) -> Dict[str, int]:
        """Prune every user over the limit. Returns deleted counts per user."""
        deleted: Dict[str, int] = {}
        db = self.session_factory()
        try:
            user_ids = tasks_repo.find_users_with_completed_over(db, self.limit)
            logger.info("Retention run: %d users over %d completed tasks", len(user_ids), self.limit)
            for user_id in user_ids:
                try:
                    deleted[user_id] = tasks_repo.delete_oldest_completed(db, user_id, self.limit)
                    db.commit()
                except Exception:
                    db.rollback()
                    logger.exception("Retention cleanup failed for user %s", user_id)
        finally:
            db.close()

        if deleted:
            logger.info("Retention run deleted %d completed tasks", sum(deleted.values()))
        return deleted


def start_scheduler(job: Optional[RetentionJob] = None) -> Optional[BackgroundScheduler]:
    global scheduler

    if not settings.RETENTION_JOB_ENABLED:
        logger.info("Retention job disabled")
        return None
    if scheduler and scheduler.running:
        return scheduler

    job = job or RetentionJob()
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(job.run, "cron", hour=settings.RETENTION_JOB_HOUR, minute=0, id="retention")
    scheduler.start()
    logger.info("Retention job scheduled daily at %02d:00 UTC", settings.RETENTION_JOB_HOUR)
    return scheduler


def shutdown_scheduler() -> None:
    global scheduler

    if scheduler and scheduler.running:
        scheduler.shutdown(wait=False)
    scheduler = None
