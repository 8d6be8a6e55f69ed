"""Field rules for users, checked before anything reaches storage.

Each check returns a list of ``ValidationIssue``; an empty list means the
value passed. Callers that need an exception wrap the list in
``UserValidationError``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.sixcities.runtime.context import get_config

from .entity import User
from .user_type import UserType

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+@[a-zA-Z0-9._-]+\.[a-zA-Z0-9_-]+")


@dataclass(frozen=True)
class ValidationIssue:
    """A single broken rule."""

    field: str
    rule: str
    message: str


def _check_length(
    field: str, label: str, value: str, min_length: int, max_length: int
) -> list[ValidationIssue]:
    if len(value) < min_length:
        return [ValidationIssue(field, "minlength", f"Min length for {label} is {min_length}")]
    if len(value) > max_length:
        return [ValidationIssue(field, "maxlength", f"Max length for {label} is {max_length}")]
    return []


def validate_name(name: str | None) -> list[ValidationIssue]:
    if name is None:
        return [ValidationIssue("name", "required", "Name is required")]
    limits = get_config().users
    return _check_length(
        "name", "name", name.strip(), limits.name_min_length, limits.name_max_length
    )


def validate_email(email: str | None) -> list[ValidationIssue]:
    if not email or not email.strip():
        return [ValidationIssue("email", "required", "Email is required")]
    if EMAIL_PATTERN.match(email.strip()) is None:
        return [ValidationIssue("email", "match", "Email is incorrect")]
    return []


def validate_user_type(user_type: UserType | str | None) -> list[ValidationIssue]:
    if user_type is None or user_type == "":
        return [ValidationIssue("user_type", "required", "User type is required")]
    allowed = {member.value for member in UserType}
    value = user_type.value if isinstance(user_type, UserType) else user_type
    if value not in allowed:
        return [
            ValidationIssue(
                "user_type",
                "enum",
                f"User type must be one of: {', '.join(sorted(allowed))}",
            )
        ]
    return []


def validate_password(password: str | None) -> list[ValidationIssue]:
    """Check a plaintext password before it is hashed."""
    if password is None:
        return [ValidationIssue("password", "required", "Password is required")]
    limits = get_config().security
    return _check_length(
        "password",
        "password",
        password,
        limits.password_min_length,
        limits.password_max_length,
    )


def validate_user(user: User) -> list[ValidationIssue]:
    """Check the stored fields of ``user``.

    The password must already be a digest at this point; only its presence
    is checked. Email uniqueness is the repository's concern.
    """
    issues: list[ValidationIssue] = []
    issues.extend(validate_name(user.name))
    issues.extend(validate_email(user.email))
    issues.extend(validate_user_type(user.user_type))
    if not user.get_password():
        issues.append(ValidationIssue("password", "required", "Password is required"))
    return issues
