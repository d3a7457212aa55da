"""Session endpoints"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from gsd.config import settings
from gsd.core.color_pool import ColorPool, get_color_pool
from gsd.database import get_db
from gsd.dependencies import get_current_user
from gsd.exceptions import NotFound
from gsd.models import User
from gsd.schemas import DevLoginRequest, SessionResponse, UserResponse
from gsd.services import auth as auth_service

router = APIRouter()


def set_session_cookie(response: Response, token: str, max_age: int) -> None:
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


@router.get("/me", response_model=UserResponse)
def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key=settings.AUTH_COOKIE_NAME, path="/")
    return {"message": "Logged out successfully"}


@router.post("/dev-login", response_model=SessionResponse)
def dev_login(
    login_in: DevLoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    pool: ColorPool = Depends(get_color_pool),
):
    """Sign in without OAuth. Only available when DEV_AUTH_ENABLED is set."""
    if not settings.DEV_AUTH_ENABLED:
        raise NotFound("Not Found")

    user = auth_service.dev_login(db, login_in, pool)
    token, expires_in = auth_service.issue_session(user)
    set_session_cookie(response, token, expires_in)
    return SessionResponse(user=UserResponse.model_validate(user), expires_in=expires_in)
