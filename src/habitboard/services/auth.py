"""Account registration and credential checks."""

from __future__ import annotations

from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import select

from ..infra.database import SessionFactory
from ..logging_config import get_logger
from ..models.user import User
from .errors import DuplicateUserError

logger = get_logger(__name__)

_hasher = PasswordHasher()


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user(user_id: int, session_factory: SessionFactory) -> Optional[User]:
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def get_user_by_email(email: str, session_factory: SessionFactory) -> Optional[User]:
    with session_factory() as session:
        user = session.exec(select(User).where(User.email == _normalize_email(email))).first()
        if user:
            session.expunge(user)
        return user


def create_user(
    *,
    name: str,
    email: str,
    password: str,
    session_factory: SessionFactory,
) -> User:
    """Create a new user with a hashed password."""

    email = _normalize_email(email)
    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.email == email)).first()
        if existing:
            raise DuplicateUserError("User with this email already exists")
        user = User(name=name.strip(), email=email, password_hash=password_hash)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(
    *,
    email: str,
    password: str,
    session_factory: SessionFactory,
) -> Optional[User]:
    """Return the user when the credentials match, otherwise None."""

    user = get_user_by_email(email, session_factory)
    if user is None:
        return None
    try:
        _hasher.verify(user.password_hash, password)
    except (VerifyMismatchError, InvalidHash, VerificationError):
        logger.info("Rejected login", extra={"user_id": user.id})
        return None
    return user


__all__ = ["authenticate", "create_user", "get_user", "get_user_by_email"]
