"""
Plan SQLModel for Team Billing
"""

from sqlmodel import Field

from app.infrastructure.db.models.base import BaseModel


class Plan(BaseModel, table=True):
    """
    Billing plan.

    ``price`` holds an exact decimal as text so repeated reads and writes
    never drift; parse it with ``decimal.Decimal`` before comparing.
    Plans are never deleted once subscriptions reference them.
    """

    __tablename__ = "plans"

    name: str = Field(max_length=20, nullable=False)
    price: str = Field(max_length=32, nullable=False)
