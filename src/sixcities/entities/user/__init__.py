"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity with password hashing
- UserTable: Database persistence model
- UserRepository: Data access layer
- UserRDO: Response projection exposed to callers
- CreateUserDTO / UpdateUserDTO / LoginUserDTO: Request payloads
"""

from .dto import CreateUserDTO, LoginUserDTO, UpdateUserDTO
from .entity import User
from .rdo import UserRDO
from .repository import UserRepository
from .table import UserTable
from .user_type import UserType
from .validation import ValidationIssue, validate_password, validate_user

__all__ = [
    "CreateUserDTO",
    "LoginUserDTO",
    "UpdateUserDTO",
    "User",
    "UserRDO",
    "UserRepository",
    "UserTable",
    "UserType",
    "ValidationIssue",
    "validate_password",
    "validate_user",
]
