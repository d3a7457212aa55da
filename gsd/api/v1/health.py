"""Liveness and readiness probes"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gsd.database import get_db
from gsd.schemas import HealthStatus, ReadinessStatus
from gsd.services.health import check_liveness, check_readiness

router = APIRouter()


@router.get("", response_model=HealthStatus)
def health():
    return check_liveness()


@router.get("/ready", response_model=ReadinessStatus)
def ready(db: Session = Depends(get_db)):
    return check_readiness(db)
