"""
Team Repository

Team lookups always carry the owner, so a team that exists but belongs
to someone else is indistinguishable from one that does not exist.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.team import Team
from app.infrastructure.db.repositories.base_repository import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for teams and ownership-scoped queries."""

    def __init__(self, session: AsyncSession):
        super().__init__(Team, session)

    async def get_owned(self, team_id: int, user_id: int) -> Optional[Team]:
        """
        Get a team only if ``user_id`` owns it.

        Returns:
            Team or None if missing or owned by another user
        """
        stmt = select(Team).where(Team.id == team_id, Team.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(self, user_id: int) -> List[Team]:
        """All teams owned by a user, oldest first."""
        stmt = select(Team).where(Team.user_id == user_id).order_by(Team.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
