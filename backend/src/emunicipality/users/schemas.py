"""Pydantic schemas for User management endpoints.

These schemas define the request/response contracts for user CRUD operations.
The password is write-only: no response schema carries it.
"""

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..utils import as_utc


class UserCreate(BaseModel):
    """Request schema for creating a new user (POST /users).

    Username and email must each be unique. The password is stored as given;
    hashing is the caller's responsibility.
    """
    model_config = ConfigDict(json_schema_extra={
        "example": {
            "username": "alice",
            "email": "alice@example.com",
            "password": "x",
            "role": "citizen"
        }
    })

    username: Optional[str] = Field(None, description="Unique login name", examples=["alice"])
    email: Optional[str] = Field(None, description="Unique email address", examples=["alice@example.com"])
    password: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("password", "password_hash"),
        description="Opaque credential, stored verbatim",
    )
    role: Optional[str] = Field(None, description="citizen | admin | employee", examples=["citizen"])


class UserUpdate(BaseModel):
    """Request schema for updating a user (PUT /users/{id}). All fields optional."""

    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, validation_alias=AliasChoices("password", "password_hash"))
    role: Optional[str] = None


class UserResponse(BaseModel):
    """Response schema for user data. Never includes the password."""
    model_config = ConfigDict(from_attributes=True)

    user_id: int = Field(..., description="User's unique identifier")
    username: str
    email: str
    role: str = Field(..., description="citizen | admin | employee")
    created_at: Optional[datetime] = Field(None, description="User creation timestamp")

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)
