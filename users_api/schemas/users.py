"""User schemas for request/response validation."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserBase(BaseModel):
    """Base user schema with common fields."""

    first_name: str
    last_name: str
    email: str


class UserCreate(UserBase):
    """Schema for creating a new user."""


class UserUpdate(BaseModel):
    """Schema for updating a user; omitted fields are left unchanged."""

    first_name: str | None = Field(None, description="New first name")
    last_name: str | None = Field(None, description="New last name")
    email: str | None = Field(None, description="New email address")

    def to_patch(self) -> dict[str, Any]:
        """Return only the fields the client actually sent with a value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class UserResponse(UserBase):
    """User schema for API responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: UUID
    created_at: datetime
