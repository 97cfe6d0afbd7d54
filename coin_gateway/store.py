"""
User persistence on top of SQLAlchemy sessions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from coin_gateway.database import session_scope
from coin_gateway.models import User

logger = logging.getLogger(__name__)


class StoreError(Exception):
    pass


class UserConflictError(StoreError):
    """The username is already taken."""


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    email: str
    password_hash: str
    salt: str


class UserStore:
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def create(self, username: str, email: str, password_hash: str, salt: str):
        try:
            with session_scope(self.session_factory) as session:
                session.add(User(username=username, email=email, password_hash=password_hash, salt=salt))
        except IntegrityError as exc:
            raise UserConflictError(f"username '{username}' already exists") from exc
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc

    def find_by_username(self, username: str) -> UserRecord | None:
        try:
            with session_scope(self.session_factory) as session:
                user = session.query(User).filter(User.username == username).one_or_none()
                if user is None:
                    return None
                return UserRecord(
                    id=user.id,
                    username=user.username,
                    email=user.email,
                    password_hash=user.password_hash,
                    salt=user.salt,
                )
        except SQLAlchemyError as exc:
            raise StoreError(str(exc)) from exc
