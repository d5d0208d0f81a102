"""
User records, storage and operations
"""

from .models import CityName, CityRecord, NewUser, UserChanges, UserRecord
from .repository import SqlUserRepository, UserRepository
from .service import CreateUserData, UpdateUserData, UserService

__all__ = [
    "CityName",
    "CityRecord",
    "CreateUserData",
    "NewUser",
    "SqlUserRepository",
    "UpdateUserData",
    "UserChanges",
    "UserRecord",
    "UserRepository",
    "UserService",
]
