"""
Account Domain Models

DTOs for registration, login, email verification and teams.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request DTO for creating an account."""
    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=72)
    locale: str = Field(default="en", max_length=20)
    timezone: Optional[str] = Field(default=None, max_length=64)


class LoginRequest(BaseModel):
    email: str
    password: str


class VerifyEmailRequest(BaseModel):
    email: str
    otp_code: str = Field(..., min_length=1, max_length=12)


class VerifyEmailResponse(BaseModel):
    """The personal team created once the email is verified."""
    team_id: int


class UserRead(BaseModel):
    """Public view of an account; never exposes the password hash."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    email_verified: bool
    is_admin: bool
    locale: str
    timezone: Optional[str] = None
    created_at: datetime


class TeamCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class TeamRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_personal: bool
    user_id: int
    created_at: datetime
    updated_at: datetime
