"""
User Repository

Accounts plus their pending email verification codes.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.user import EmailVerification, User
from app.infrastructure.db.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):
    """
    Repository for User CRUD and specialized queries.

    Extends base repository with account-specific operations:
    - get_by_email: login and duplicate detection
    - get_admin: the storage half of the admin access check
    - latest_verification: the code to check at email verification
    """

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_admin(self, user_id: int) -> Optional[User]:
        """
        Get a user only if they carry the admin flag.

        Returns:
            User or None if missing or not an admin
        """
        stmt = select(User).where(User.id == user_id, User.is_admin.is_(True))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_verification(
        self,
        user_id: int,
        email: str,
        otp_code: str,
    ) -> EmailVerification:
        verification = EmailVerification(
            user_id=user_id,
            email=email,
            otp_code=otp_code,
        )
        self.session.add(verification)
        await self.session.flush()
        await self.session.refresh(verification)
        return verification

    async def latest_verification(
        self,
        user_id: int,
        email: str,
    ) -> Optional[EmailVerification]:
        stmt = (
            select(EmailVerification)
            .where(
                EmailVerification.user_id == user_id,
                EmailVerification.email == email,
            )
            .order_by(EmailVerification.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
