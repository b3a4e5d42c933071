"""
SQLModel ORM Models for Team Billing

Exports all database models for Alembic autogenerate and application use.
Import models here to register them with SQLModel.metadata.
"""

from app.infrastructure.db.models.base import (
    BaseModel,
    IntIDMixin,
    TimestampMixin,
    utcnow,
)
from app.infrastructure.db.models.user import User, EmailVerification
from app.infrastructure.db.models.team import Team
from app.infrastructure.db.models.plan import Plan
from app.infrastructure.db.models.subscription import (
    Subscription,
    Order,
    SubscriptionActivation,
)


__all__ = [
    # Base
    "BaseModel",
    "IntIDMixin",
    "TimestampMixin",
    "utcnow",
    # Accounts
    "User",
    "EmailVerification",
    "Team",
    # Billing ledger
    "Plan",
    "Subscription",
    "Order",
    "SubscriptionActivation",
]
