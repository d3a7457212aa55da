from typing import Optional

from sqlalchemy.orm import Session

from gsd.models import User


def find_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def find_by_google_id(db: Session, google_id: str) -> Optional[User]:
    return db.query(User).filter(User.google_id == google_id).first()


def upsert_by_google_id(db: Session, google_id: str, email: str, name: Optional[str]) -> User:
    user = find_by_google_id(db, google_id)
    if user is None:
        user = User(google_id=google_id, email=email, name=name)
        db.add(user)
    else:
        user.email = email
        user.name = name
    db.flush()
    return user


def lock_user(db: Session, user_id: str) -> Optional[User]:
    """Take a row lock on the user so list-structure changes run one at a time."""
    return db.query(User).filter(User.id == user_id).with_for_update().first()
