from datetime import timedelta

import pytest
from fastapi import HTTPException

from gsd.config import Settings, parse_duration
from gsd.models import TaskList
from gsd.schemas import GoogleProfile
from gsd.security import create_access_token, decode_access_token
from gsd.services.auth import authenticate_user


@pytest.mark.parametrize(
    "value,seconds",
    [("7d", 604800), ("24h", 86400), ("60m", 3600), ("3600s", 3600), ("3600", 3600)],
)
def test_parse_duration(value, seconds):
    assert parse_duration(value) == seconds


@pytest.mark.parametrize("value", ["", "7w", "-5m", "abc", "0", "0d"])
def test_parse_duration_rejects_malformed_values(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_cors_origins_are_split_and_trimmed():
    config = Settings(CORS_ORIGINS="http://a.test, http://b.test ,,")
    assert config.cors_origins_list == ["http://a.test", "http://b.test"]


def test_access_token_round_trip():
    token = create_access_token("user-1")
    assert decode_access_token(token) == "user-1"


def test_expired_or_tampered_token_is_rejected():
    expired = create_access_token("user-1", expires_delta=timedelta(seconds=-10))
    assert decode_access_token(expired) is None
    assert decode_access_token(create_access_token("user-1") + "x") is None


def test_authenticate_user_onboards_once(db_session, pool):
    profile = GoogleProfile(id="g-1", email="ann@example.com", given_name="Ann", family_name="Lee")
    user = authenticate_user(db_session, profile, pool)
    assert user.name == "Ann Lee"

    again = authenticate_user(
        db_session, GoogleProfile(id="g-1", email="ann@new.example.com", display_name="Ann"), pool
    )
    assert again.id == user.id
    assert again.email == "ann@new.example.com"
    assert db_session.query(TaskList).filter(TaskList.user_id == user.id).count() == 3


def test_authenticate_user_requires_email(db_session, pool):
    with pytest.raises(HTTPException) as exc:
        authenticate_user(db_session, GoogleProfile(id="g-2"), pool)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Email not provided by Google"
