"""
Repository Layer for Team Billing

Exports all repository classes for dependency injection.
"""

from app.infrastructure.db.repositories.base_repository import BaseRepository
from app.infrastructure.db.repositories.plan_repository import PlanRepository
from app.infrastructure.db.repositories.subscription_repository import (
    SubscriptionRepository,
)
from app.infrastructure.db.repositories.team_repository import TeamRepository
from app.infrastructure.db.repositories.user_repository import UserRepository


__all__ = [
    # Base
    "BaseRepository",
    # Repositories
    "PlanRepository",
    "SubscriptionRepository",
    "TeamRepository",
    "UserRepository",
]
