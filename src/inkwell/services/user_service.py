"""Account registration and login."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core import security
from inkwell.core.errors import InvalidCredentialsError, UsernameTakenError
from inkwell.models.user import User

__all__ = [
    "authenticate_user",
    "create_user",
    "get_user",
    "get_user_by_username",
    "get_users",
    "login_user",
]

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> User | None:
    """Return a single user by primary key."""
    return db.get(User, user_id)


def get_user_by_username(db: Session, username: str) -> User | None:
    """Return the user registered under ``username``."""
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def get_users(db: Session) -> Sequence[User]:
    """Return every registered user."""
    return db.execute(select(User).order_by(User.id)).scalars().all()


def create_user(db: Session, username: str, password: str) -> User:
    """Persist a new user with a bcrypt-hashed password.

    Raises:
        UsernameTakenError: If the username is already registered.
    """
    if get_user_by_username(db, username) is not None:
        raise UsernameTakenError(f"Username {username!r} is already taken")

    db_user = User(username=username, password_hash=security.hash_password(password))
    try:
        with db.begin_nested():
            db.add(db_user)
    except IntegrityError as err:
        raise UsernameTakenError(f"Username {username!r} is already taken") from err
    logger.info("Registered user %s", username)
    return db_user


def authenticate_user(db: Session, username: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        InvalidCredentialsError: If the username is unknown or the password is wrong.
    """
    user = get_user_by_username(db, username)
    if user is None or not security.verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid username or password")
    return user


def login_user(db: Session, username: str, password: str) -> tuple[User, str]:
    """Authenticate and issue an access token for the user."""
    user = authenticate_user(db, username, password)
    token = security.create_access_token(user.id, user.username)
    return user, token
