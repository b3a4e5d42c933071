"""
Subscription Repository

Data access for the billing ledger: subscriptions, their append-only
orders, and the activations that mark an order as paid.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.db.models.subscription import (
    Order,
    Subscription,
    SubscriptionActivation,
)
from app.infrastructure.db.repositories.base_repository import BaseRepository


logger = logging.getLogger(__name__)


class SubscriptionRepository(BaseRepository[Subscription]):
    """
    Repository for subscription ledger access.

    Orders and activations have no lifecycle of their own outside a
    subscription, so they are queried and appended through here.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Subscription, session)

    # =========================================================================
    # Query Methods
    # =========================================================================

    async def get_by_team_id(self, team_id: int) -> Optional[Subscription]:
        """
        Get the subscription owned by a team.

        Args:
            team_id: Team ID

        Returns:
            Subscription or None
        """
        stmt = select(Subscription).where(Subscription.team_id == team_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_order(self, order_id: int) -> Optional[Order]:
        return await self.session.get(Order, order_id)

    async def get_latest_order(
        self,
        subscription_id: int,
    ) -> Optional[Tuple[Order, Optional[SubscriptionActivation]]]:
        """
        Get the most recent order (highest ID) with its activation, if any.

        Args:
            subscription_id: Subscription ID

        Returns:
            ``(order, activation_or_None)`` or None when no order exists
        """
        stmt = (
            select(Order, SubscriptionActivation)
            .outerjoin(
                SubscriptionActivation,
                SubscriptionActivation.order_id == Order.id,
            )
            .where(Order.subscription_id == subscription_id)
            .order_by(Order.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return row[0], row[1]

    async def get_activation(
        self,
        order_id: int,
    ) -> Optional[SubscriptionActivation]:
        stmt = select(SubscriptionActivation).where(
            SubscriptionActivation.order_id == order_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # =========================================================================
    # Command Methods
    # =========================================================================

    async def add_order(self, subscription_id: int, price: str) -> Order:
        """
        Append an order for one billing cycle.

        Args:
            subscription_id: Subscription being charged
            price: Price captured from the plan at order time

        Returns:
            Created order with ID
        """
        order = Order(subscription_id=subscription_id, price=price)
        self.session.add(order)
        await self.session.flush()
        await self.session.refresh(order)

        logger.info(f"Placed order {order.id} for subscription {subscription_id}")
        return order

    async def add_activation(self, order_id: int) -> SubscriptionActivation:
        """Record payment for an order."""
        activation = SubscriptionActivation(order_id=order_id)
        self.session.add(activation)
        await self.session.flush()
        await self.session.refresh(activation)

        logger.info(f"Activated order {order_id}")
        return activation
