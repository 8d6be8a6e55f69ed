"""User domain entity."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field, field_validator

from src.sixcities.core.security import create_sha256, digests_match
from src.sixcities.entities._base import Entity

from .dto import CreateUserDTO
from .user_type import UserType


class User(Entity):
    """User entity representing an account in the system.

    Field rules (name and email shape, password length) are checked by
    ``validation.validate_user`` before persistence, not on construction.
    The password field only ever holds a digest and is excluded from
    serialization and repr.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(description="User's display name")
    email: str = Field(description="User's email address")
    avatar_path: str = Field(default="", description="Path to the user's avatar")
    password: str = Field(default="", exclude=True, repr=False, description="Password digest")
    user_type: UserType = Field(description="User's role")

    @field_validator("name", "email", mode="before")
    @classmethod
    def _trim(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @classmethod
    def from_dto(cls, dto: CreateUserDTO) -> User:
        """Build an unsaved user from a creation request.

        Only name, email and role are copied; the password must be set
        afterwards with ``set_password``.
        """
        return cls(name=dto.name, email=dto.email, user_type=dto.user_type)

    @property
    def is_pro(self) -> bool:
        return self.user_type == UserType.PRO

    def set_password(self, password: str, salt: str) -> None:
        self.password = create_sha256(password, salt)

    def get_password(self) -> str:
        return self.password

    def verify_password(self, password: str, salt: str) -> bool:
        if not self.password:
            return False
        return digests_match(create_sha256(password, salt), self.password)

    def __eq__(self, other: Any) -> bool:
        """Compare users by business attributes, ignoring timestamps."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
            and self.avatar_path == other.avatar_path
            and self.password == other.password
            and self.user_type == other.user_type
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.email,
            self.avatar_path,
            self.user_type,
        ))
