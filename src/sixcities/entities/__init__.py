"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model with business logic
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .user import User, UserRDO, UserRepository, UserTable, UserType

__all__ = [
    "User",
    "UserRDO",
    "UserRepository",
    "UserTable",
    "UserType",
]
