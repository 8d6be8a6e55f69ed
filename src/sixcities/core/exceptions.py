"""Exceptions raised by the user data layer."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.sixcities.entities.user.validation import ValidationIssue


class UserError(Exception):
    """Base class for user data layer errors."""


class UserValidationError(UserError):
    """Raised when a user or a plaintext password breaks a field rule."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        summary = "; ".join(f"{issue.field}: {issue.message}" for issue in self.issues)
        super().__init__(f"User validation failed: {summary}")

    @property
    def fields(self) -> set[str]:
        return {issue.field for issue in self.issues}


class UserAlreadyExistsError(UserError):
    """Raised when another user already owns the email address."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User with email '{email}' already exists")


class UserNotFoundError(UserError):
    """Raised when an update targets a user id that is not stored."""

    def __init__(self, user_id: str | None):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")
