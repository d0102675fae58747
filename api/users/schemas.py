"""
User API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from core.schemas import ApiModel, reject_null


class UserCreate(ApiModel):
    email: EmailStr
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)


class UserUpdate(ApiModel):
    email: EmailStr | None = None
    first_name: str | None = Field(default=None, min_length=2, max_length=50)
    last_name: str | None = Field(default=None, min_length=2, max_length=50)

    @field_validator("email", "first_name", "last_name")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class UserResponse(ApiModel):
    id: int
    email: str
    first_name: str
    last_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
