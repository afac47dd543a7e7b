"""Data models for usersapi."""

from usersapi.models.user import User, CreateUser, UpdateUser

__all__ = [
    "User",
    "CreateUser",
    "UpdateUser",
]
