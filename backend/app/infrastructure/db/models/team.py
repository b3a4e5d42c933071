"""
Team SQLModel for Team Billing
"""

from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import Field

from app.infrastructure.db.models.base import BaseModel


class Team(BaseModel, table=True):
    """A billable group owned by exactly one user."""

    __tablename__ = "teams"

    name: str = Field(max_length=100, nullable=False)
    is_personal: bool = Field(nullable=False)
    user_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("users.id", ondelete="RESTRICT", onupdate="RESTRICT"),
            nullable=False,
            index=True,
        )
    )
