from enum import Enum


class UserType(str, Enum):
    """Roles a user can hold."""

    REGULAR = "regular"
    PRO = "pro"

    def __str__(self) -> str:
        return self.value
