"""
Subscription API Routes

Subscribe a team, confirm payment of an order, renew, and inspect status.
Payment confirmation stands in for the external payment collaborator and
is therefore admin-only.
"""

import logging

from fastapi import APIRouter, status

from app.api.dependencies import AdminDep, LedgerServiceDep, UserDep
from app.domain.subscription import (
    ActivationRead,
    OrderRead,
    SubscribeRequest,
    SubscriptionRead,
    SubscriptionStatusResponse,
)


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/subscriptions",
    response_model=SubscriptionRead,
    status_code=status.HTTP_201_CREATED,
)
async def subscribe(
    request: SubscribeRequest,
    current_user: UserDep,
    service: LedgerServiceDep,
):
    """
    Subscribe one of the caller's teams to a plan.

    The subscription and its first (unpaid) order are created together.
    """
    return await service.subscribe(
        current_user.user_id,
        request.team_id,
        request.plan_id,
    )


@router.get(
    "/subscriptions/teams/{team_id}",
    response_model=SubscriptionStatusResponse,
)
async def get_subscription_status(
    team_id: int,
    current_user: UserDep,
    service: LedgerServiceDep,
):
    """Current plan, latest order and whether the team is paid up."""
    return await service.get_status(current_user.user_id, team_id)


@router.post(
    "/subscriptions/teams/{team_id}/renew",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
async def renew_subscription(
    team_id: int,
    current_user: UserDep,
    service: LedgerServiceDep,
):
    """Place the next order once the current paid period has expired."""
    return await service.renew(current_user.user_id, team_id)


@router.post(
    "/subscriptions/orders/{order_id}/activate",
    response_model=ActivationRead,
    status_code=status.HTTP_201_CREATED,
)
async def activate_order(
    order_id: int,
    admin: AdminDep,
    service: LedgerServiceDep,
):
    """Record that an order has been paid."""
    activation = await service.activate_order(order_id)
    logger.info(f"Admin {admin.user_id} activated order {order_id}")
    return activation
