"""
Subscription Database Models

SQLModel tables for the subscription -> order -> activation ledger.
Every foreign key is non-nullable and RESTRICTs delete/update so history
can never be orphaned.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer
from sqlmodel import Field

from app.infrastructure.db.models.base import BaseModel


def _restrict_fk(target: str, unique: bool = False) -> Column:
    return Column(
        Integer,
        ForeignKey(target, ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        unique=unique,
        index=True,
    )


class Subscription(BaseModel, table=True):
    """
    A team's current plan selection.

    Maps to the 'subscriptions' table. One row per team.
    """

    __tablename__ = "subscriptions"

    plan_id: int = Field(sa_column=_restrict_fk("plans.id"))
    team_id: int = Field(sa_column=_restrict_fk("teams.id", unique=True))
    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True),
    )


class Order(BaseModel, table=True):
    """
    One billing cycle's charge.

    ``price`` is copied from the plan when the order is placed, so later
    plan edits never rewrite past orders. Orders are append-only.
    """

    __tablename__ = "orders"

    subscription_id: int = Field(sa_column=_restrict_fk("subscriptions.id"))
    price: str = Field(max_length=32, nullable=False)


class SubscriptionActivation(BaseModel, table=True):
    """Proof of payment for an order; ``created_at`` starts the paid period."""

    __tablename__ = "subscription_activations"

    order_id: int = Field(sa_column=_restrict_fk("orders.id", unique=True))
