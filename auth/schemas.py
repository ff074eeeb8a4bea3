"""
Request / response schemas for the auth routes.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AccountUpdate(BaseModel):
    """
    Partial account change set.

    Only fields the caller actually sent end up in ``model_fields_set``;
    that set is what decides whether the password gets re-hashed.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=128)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1, max_length=128)

    @property
    def password_changed(self) -> bool:
        return "password" in self.model_fields_set and self.password is not None


class AccountOut(BaseModel):
    """Public account projection; has no credential field."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: uuid.UUID = Field(validation_alias="user_id")
    name: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    user: AccountOut
    token: str
