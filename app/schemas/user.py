"""User schemas."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    """User registration schema."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    name: str | None = Field(None, min_length=1, max_length=120)


class UserLogin(BaseModel):
    """User login schema."""

    email: EmailStr
    password: str


class User(BaseModel):
    """User response schema."""

    id: str
    email: EmailStr
    name: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """Token response schema."""

    access_token: str
    token_type: str = "bearer"
    user: User
