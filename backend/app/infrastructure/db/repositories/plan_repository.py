"""
Plan Repository
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.plan import Plan
from app.infrastructure.db.repositories.base_repository import BaseRepository


class PlanRepository(BaseRepository[Plan]):
    """Plans are read by everyone and written only through admin routes."""

    def __init__(self, session: AsyncSession):
        super().__init__(Plan, session)
