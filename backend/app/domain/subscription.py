"""
Subscription Domain Models

Enums, DTOs and ledger rules for the plans / subscriptions bounded context.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class PlanName(str, Enum):
    """Billing-cycle kinds a plan can be sold as."""
    MONTH = "month"
    YEAR = "year"


# =============================================================================
# Request/Response DTOs
# =============================================================================

class PlanRead(BaseModel):
    """Plan as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: str = Field(description="Exact decimal amount as text")
    created_at: datetime
    updated_at: datetime


class PlanWriteRequest(BaseModel):
    """Request DTO for creating or updating a plan."""
    name: PlanName = Field(..., description="Billing cycle kind")
    price: Decimal = Field(..., description="Plan price")


class MutationResult(BaseModel):
    """Outcome of an admin plan mutation."""
    success: bool


class SubscribeRequest(BaseModel):
    """Request DTO for subscribing a team to a plan."""
    team_id: int
    plan_id: int


class SubscriptionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    plan_id: int
    team_id: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class OrderRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subscription_id: int
    price: str
    created_at: datetime


class ActivationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    order_id: int
    created_at: datetime


class SubscriptionStatusResponse(BaseModel):
    """Response DTO for a team's subscription status."""
    subscription_id: int
    team_id: int
    plan: PlanRead
    is_active: bool = Field(description="The subscription's stored active flag")
    latest_order_id: Optional[int] = None
    activated_at: Optional[datetime] = None
    period_end: Optional[datetime] = None
    active_for_business: bool = Field(
        description="Active flag set, latest order paid, paid period not elapsed"
    )


# =============================================================================
# Ledger Rules (Business Logic)
# =============================================================================

CYCLE_DAYS = {
    PlanName.MONTH: 30,
    PlanName.YEAR: 365,
}


def parse_price(price: str) -> Decimal:
    """Parse a stored price; stored prices are always exact decimals."""
    try:
        return Decimal(price)
    except InvalidOperation as e:
        raise ValueError(f"Invalid stored price: {price!r}") from e


def format_price(price: Decimal) -> str:
    """Render a price as plain decimal text, e.g. ``Decimal('50.50')`` -> ``'50.5'``."""
    return format(price.normalize(), "f")


def ensure_utc(moment: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on read)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def cycle_days_for(plan_name: str) -> int:
    """Paid period length for a plan's billing cycle."""
    return CYCLE_DAYS[PlanName(plan_name)]


def period_end(activated_at: datetime, plan_name: str) -> datetime:
    return ensure_utc(activated_at) + timedelta(days=cycle_days_for(plan_name))


def is_active_for_business(
    is_active: bool,
    activated_at: Optional[datetime],
    plan_name: str,
    now: datetime,
) -> bool:
    """
    A subscription counts as active only if its flag is set, its latest
    order has been paid, and that payment's period has not run out.
    """
    if not is_active or activated_at is None:
        return False
    return period_end(activated_at, plan_name) > ensure_utc(now)
