"""Sign-in: user upsert, onboarding and session tokens."""
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from gsd.config import settings
from gsd.core.color_pool import ColorPool
from gsd.exceptions import InvariantViolation
from gsd.models import User
from gsd.repositories import users as users_repo
from gsd.schemas import DevLoginRequest, GoogleProfile
from gsd.security import create_access_token
from gsd.services.onboarding import onboard_user

logger = logging.getLogger(__name__)

DEV_GOOGLE_ID_PREFIX = "dev:"


def _display_name(profile: GoogleProfile) -> Optional[str]:
    if profile.display_name:
        return profile.display_name
    parts = [part for part in (profile.given_name, profile.family_name) if part]
    return " ".join(parts) or None


def authenticate_user(db: Session, profile: GoogleProfile, pool: ColorPool) -> User:
    """Create or refresh the user for an OAuth profile and onboard new accounts."""
    if not profile.email:
        raise InvariantViolation("Email not provided by Google")

    try:
        user = users_repo.upsert_by_google_id(
            db, google_id=profile.id, email=profile.email, name=_display_name(profile)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)

    if onboard_user(db, user, pool):
        logger.info("New user %s signed up", user.id)
    return user


def dev_login(db: Session, login_in: DevLoginRequest, pool: ColorPool) -> User:
    profile = GoogleProfile(
        id=f"{DEV_GOOGLE_ID_PREFIX}{login_in.email.lower()}",
        email=login_in.email,
        display_name=login_in.name,
    )
    return authenticate_user(db, profile, pool)


def issue_session(user: User) -> Tuple[str, int]:
    """Return a signed token for ``user`` and its lifetime in seconds."""
    return create_access_token(user.id), settings.jwt_expires_seconds
