"""
User SQLModel for Team Billing

Accounts and the one-time codes used to verify their email address.
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from app.infrastructure.db.models.base import BaseModel


class User(BaseModel, table=True):
    """
    Registered account.

    ``is_admin`` is what the admin access level checks against; it is
    only ever set out of band (see ``scripts/create_admin.py``).
    """

    __tablename__ = "users"

    email: str = Field(max_length=255, unique=True, index=True, nullable=False)
    name: str = Field(max_length=100, nullable=False)
    hashed_password: Optional[str] = Field(default=None, max_length=255)
    email_verified: bool = Field(default=False, nullable=False)
    is_admin: bool = Field(default=False, nullable=False)
    locale: str = Field(default="en", max_length=20, nullable=False)
    timezone: Optional[str] = Field(default=None, max_length=64)


class EmailVerification(BaseModel, table=True):
    """One-time code issued at registration."""

    __tablename__ = "email_verifications"

    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="RESTRICT", onupdate="RESTRICT"),
            nullable=False,
            index=True,
        )
    )
    email: str = Field(max_length=255, nullable=False)
    otp_code: str = Field(max_length=12, nullable=False)
    attempts: int = Field(default=0, nullable=False)
