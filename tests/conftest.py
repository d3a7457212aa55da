import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gsd.core.color_pool import ColorPool
from gsd.database import Base
from gsd.models import User
from gsd.repositories import lists as lists_repo
from gsd.services.onboarding import onboard_user

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def pool() -> ColorPool:
    return ColorPool()


def make_user(session: Session, google_id: str = "google-alice", email: str = "alice@example.com") -> User:
    user = User(google_id=google_id, email=email, name=email.split("@")[0].title())
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def user(db_session: Session) -> User:
    return make_user(db_session)


@pytest.fixture
def other_user(db_session: Session) -> User:
    return make_user(db_session, google_id="google-bob", email="bob@example.com")


@pytest.fixture
def onboarded(db_session: Session, user: User, pool: ColorPool) -> dict:
    """The user's default lists keyed by name: Backlog, Today and Done."""
    onboard_user(db_session, user, pool)
    return {item.name: item for item in lists_repo.find_many_by_user(db_session, user.id, include_done=True)}

