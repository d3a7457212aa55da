from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from gsd.config import settings
from gsd.database import get_db
from gsd.exceptions import Unauthorized
from gsd.models import User
from gsd.repositories import users as users_repo
from gsd.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the signed-in user from the session cookie or a Bearer token."""
    token = credentials.credentials if credentials else request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise Unauthorized("Not authenticated")

    user_id = decode_access_token(token)
    if not user_id:
        raise Unauthorized("Invalid or expired session")

    user = users_repo.find_by_id(db, user_id)
    if user is None:
        raise Unauthorized("User not found")
    return user
