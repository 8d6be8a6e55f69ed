"""User repository for data access operations."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from src.sixcities.core.exceptions import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserValidationError,
)
from src.sixcities.entities._base import utc_now

from .entity import User
from .table import UserTable
from .validation import validate_user


class UserRepository:
    """Data-access layer for users.

    The repository flushes so that storage errors surface immediately, but
    never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: str) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def get_by_email(self, email: str) -> User | None:
        row = self._get_row_by_email(email)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def exists(self, user_id: str) -> bool:
        return self._session.get(UserTable, user_id) is not None

    def create(self, user: User) -> User:
        """Persist a new user and return it with its id and timestamps."""
        self._validate(user)
        if self._get_row_by_email(user.email) is not None:
            raise UserAlreadyExistsError(user.email)

        data = user.model_dump(exclude={"id"} if user.id is None else set())
        data["password"] = user.get_password()
        data["user_type"] = user.user_type.value
        now = utc_now()
        data["created_at"] = now
        data["updated_at"] = now

        row = UserTable(**data)
        with self._savepoint(user.email):
            self._session.add(row)

        logger.debug("Stored user {} ({})", row.id, row.email)
        return User.model_validate(row, from_attributes=True)

    def update(self, user: User) -> User:
        """Write every mutable field of ``user`` back to its row."""
        row = self._session.get(UserTable, user.id) if user.id is not None else None
        if row is None:
            raise UserNotFoundError(user.id)

        self._validate(user)
        owner = self._get_row_by_email(user.email)
        if owner is not None and owner.id != row.id:
            raise UserAlreadyExistsError(user.email)

        with self._savepoint(user.email):
            row.name = user.name
            row.email = user.email
            row.avatar_path = user.avatar_path
            row.password = user.get_password()
            row.user_type = user.user_type.value
            row.updated_at = utc_now()

        logger.debug("Updated user {}", row.id)
        return User.model_validate(row, from_attributes=True)

    def _get_row_by_email(self, email: str) -> UserTable | None:
        statement = select(UserTable).where(UserTable.email == email.strip())
        return self._session.exec(statement).first()

    @staticmethod
    def _validate(user: User) -> None:
        issues = validate_user(user)
        if issues:
            raise UserValidationError(issues)

    @contextmanager
    def _savepoint(self, email: str) -> Iterator[None]:
        """Run writes in a SAVEPOINT so a failure leaves the caller's pending work intact."""
        try:
            with self._session.begin_nested():
                yield
        except IntegrityError as e:
            if _violates_unique_email(e):
                raise UserAlreadyExistsError(email) from e
            raise


def _violates_unique_email(error: IntegrityError) -> bool:
    # SQLite names the column, PostgreSQL names the index
    message = str(error.orig)
    return "users.email" in message or "ix_users_email" in message
