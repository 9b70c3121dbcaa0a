"""User model definition using SQLAlchemy Core."""

from sqlalchemy import (
    Column,
    DateTime,
    Integer,
    MetaData,
    String,
    Table,
    Uuid,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    # Internal sequence, never reused and never used in URLs
    Column("id", Integer, primary_key=True, autoincrement=True),
    # External identifier, assigned once at creation
    Column("user_id", Uuid(as_uuid=True), nullable=False, unique=True),
    Column("first_name", String, nullable=False),
    Column("last_name", String, nullable=False),
    Column("email", String, nullable=False, unique=True),
    # Local time, no time zone
    Column("created_at", DateTime(timezone=False), nullable=False),
    sqlite_autoincrement=True,
)
