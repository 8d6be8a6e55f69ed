"""User database table model."""

from sqlmodel import Field

from src.sixcities.entities._base import EntityTable


class UserTable(EntityTable, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database.
    Email uniqueness is enforced here by a unique index.
    """

    __tablename__ = "users"

    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    avatar_path: str = Field(default="")
    password: str = Field(default="")
    user_type: str = Field(max_length=32)
