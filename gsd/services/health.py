import time
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from gsd.database import ping_database
from gsd.schemas import HealthStatus, ReadinessStatus

STARTED_AT = time.monotonic()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_liveness() -> HealthStatus:
    return HealthStatus(status="ok", timestamp=_timestamp(), uptime=int(time.monotonic() - STARTED_AT))


def check_readiness(db: Session) -> ReadinessStatus:
    database_up = ping_database(db)
    return ReadinessStatus(
        status="ready" if database_up else "not_ready",
        timestamp=_timestamp(),
        checks={"database": "up" if database_up else "down"},
    )
