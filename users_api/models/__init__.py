"""Database models."""

from users_api.models.users import metadata, users

__all__ = [
    "metadata",
    "users",
]
