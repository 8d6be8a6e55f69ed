"""Request payloads accepted by the user service."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .user_type import UserType


class _RequestDTO(BaseModel):
    """Accepts both camelCase (wire) and snake_case (Python) keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class CreateUserDTO(_RequestDTO):
    name: str = Field(description="Display name")
    email: str = Field(description="Email address, unique across users")
    user_type: UserType = Field(description="Role of the new user")
    password: str = Field(description="Plaintext password, hashed before storage")
    avatar_path: str = Field(default="", description="Path to the avatar image")


class UpdateUserDTO(_RequestDTO):
    name: str | None = None
    avatar_path: str | None = None
    user_type: UserType | None = None


class LoginUserDTO(_RequestDTO):
    email: str
    password: str
