"""
Billing Services

Business operations over the billing ledger. Every service works on the
caller's session and never commits on its own (with one documented
exception), so a request's writes land together or not at all.
"""

import logging
import secrets
from datetime import datetime
from typing import Callable, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import Settings
from app.domain.accounts import RegisterRequest
from app.domain.proration import prorate_upgrade
from app.domain.subscription import (
    PlanRead,
    PlanWriteRequest,
    SubscriptionStatusResponse,
    ensure_utc,
    format_price,
    is_active_for_business,
    parse_price,
    period_end,
)
from app.infrastructure.db.models import (
    Order,
    Plan,
    Subscription,
    SubscriptionActivation,
    Team,
    User,
    utcnow,
)
from app.infrastructure.db.repositories import (
    PlanRepository,
    SubscriptionRepository,
    TeamRepository,
    UserRepository,
)
from app.infrastructure.exceptions import (
    BadRequestError,
    NotFoundError,
    UnauthorizedError,
)
from app.infrastructure.security.passwords import hash_password, verify_password


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class PlanService:
    """
    Service for plan reads and admin plan writes.

    Admin writes report storage failures as ``False`` instead of raising;
    the admin UI only needs to know whether the write went through.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.plans = PlanRepository(session)

    async def get_plan(self, plan_id: int) -> Plan:
        """
        Raises:
            NotFoundError: no plan with this ID
        """
        plan = await self.plans.get_by_id(plan_id)
        if not plan:
            raise NotFoundError("plan not found")
        return plan

    async def list_plans(self) -> List[Plan]:
        """All plans, or an empty list if storage fails."""
        try:
            return await self.plans.get_all(limit=1000)
        except SQLAlchemyError as e:
            logger.error(f"Error listing plans: {e}")
            return []

    async def create_plan(self, data: PlanWriteRequest) -> bool:
        try:
            plan = await self.plans.create(
                name=data.name.value,
                price=format_price(data.price),
            )
        except SQLAlchemyError as e:
            logger.error(f"Error creating plan: {e}")
            await self.session.rollback()
            return False

        logger.info(f"Created plan {plan.id} ({plan.name} at {plan.price})")
        return True

    async def update_plan(self, plan_id: int, data: PlanWriteRequest) -> bool:
        try:
            plan = await self.plans.update(
                plan_id,
                name=data.name.value,
                price=format_price(data.price),
            )
        except SQLAlchemyError as e:
            logger.error(f"Error updating plan {plan_id}: {e}")
            await self.session.rollback()
            return False

        if plan is None:
            logger.warning(f"Plan {plan_id} not found for update")
            return False

        logger.info(f"Updated plan {plan_id} ({plan.name} at {plan.price})")
        return True


class UpgradeQuoteService:
    """
    Prices a plan upgrade for a team's paid subscription.

    Read-only: nothing is ordered or changed. The checks run in a fixed
    order and the first failing one decides the error.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings,
        clock: Clock = utcnow,
    ):
        self.plans = PlanRepository(session)
        self.teams = TeamRepository(session)
        self.subscriptions = SubscriptionRepository(session)
        self.cycle_days = settings.proration_cycle_days
        self.clock = clock

    async def compute_upgrade_charge(
        self,
        user_id: int,
        team_id: int,
        plan_id: int,
    ) -> int:
        """
        Prorated charge for moving ``team_id`` onto ``plan_id``.

        Args:
            user_id: Authenticated caller; must own the team
            team_id: Team whose subscription is upgraded
            plan_id: Target plan

        Returns:
            Integer charge (zero or negative once the paid cycle elapsed)

        Raises:
            NotFoundError: plan missing, or team missing / not owned
            BadRequestError: subscription missing, inactive, unpaid, or
                the target is not a strictly pricier plan
        """
        target_plan = await self.plans.get_by_id(plan_id)
        if not target_plan:
            raise NotFoundError("plan not found")

        team = await self.teams.get_owned(team_id, user_id)
        if not team:
            raise NotFoundError("team not found")

        subscription = await self.subscriptions.get_by_team_id(team.id)
        if not subscription:
            raise BadRequestError("This team is not subscribe.")

        if not subscription.is_active:
            raise BadRequestError("There is no active subscription for the given team.")

        current_plan = await self.plans.get_by_id(subscription.plan_id)
        if current_plan is None:
            raise BadRequestError("invalid subscription.")

        if current_plan.id == target_plan.id:
            raise BadRequestError("cant upgrade to the same plan.")

        current_price = parse_price(current_plan.price)
        target_price = parse_price(target_plan.price)
        if target_price <= current_price:
            raise BadRequestError("cant upgrade to plan less than the current plan.")

        latest = await self.subscriptions.get_latest_order(subscription.id)
        if latest is None:
            raise BadRequestError("invalid subscription.")

        order, activation = latest
        if activation is None:
            raise BadRequestError("not payed.")

        charge = prorate_upgrade(
            current_price,
            target_price,
            activation.created_at,
            self.clock(),
            self.cycle_days,
        )
        logger.debug(
            f"Upgrade quote team={team.id} order={order.id} "
            f"plan {current_plan.id}->{target_plan.id}: {charge}"
        )
        return charge


class BillingLedgerService:
    """
    Subscription lifecycle: subscribe, pay (activate), renew, inspect.

    Orders are only ever appended; an order gets at most one activation.
    """

    def __init__(self, session: AsyncSession, clock: Clock = utcnow):
        self.plans = PlanRepository(session)
        self.teams = TeamRepository(session)
        self.subscriptions = SubscriptionRepository(session)
        self.clock = clock

    async def _owned_team(self, user_id: int, team_id: int) -> Team:
        team = await self.teams.get_owned(team_id, user_id)
        if not team:
            raise NotFoundError("team not found")
        return team

    async def _team_subscription(self, team: Team) -> Subscription:
        subscription = await self.subscriptions.get_by_team_id(team.id)
        if not subscription:
            raise BadRequestError("This team is not subscribe.")
        return subscription

    async def subscribe(
        self,
        user_id: int,
        team_id: int,
        plan_id: int,
    ) -> Subscription:
        """
        Subscribe a team to a plan and place its first order.

        Raises:
            NotFoundError: team missing / not owned, or plan missing
            BadRequestError: the team already has a subscription
        """
        team = await self._owned_team(user_id, team_id)

        plan = await self.plans.get_by_id(plan_id)
        if not plan:
            raise NotFoundError("plan not found")

        if await self.subscriptions.get_by_team_id(team.id):
            raise BadRequestError("This team is already subscribed.")

        try:
            subscription = await self.subscriptions.create(
                plan_id=plan.id,
                team_id=team.id,
                is_active=True,
            )
        except IntegrityError as e:
            # lost a race with a concurrent subscribe for the same team
            raise BadRequestError("This team is already subscribed.", original_error=e)

        await self.subscriptions.add_order(subscription.id, plan.price)

        logger.info(f"Subscribed team {team.id} to plan {plan.id} (subscription {subscription.id})")
        return subscription

    async def activate_order(self, order_id: int) -> SubscriptionActivation:
        """
        Record successful payment of an order.

        Raises:
            NotFoundError: no such order
            BadRequestError: the order was already activated
        """
        order = await self.subscriptions.get_order(order_id)
        if not order:
            raise NotFoundError("order not found")

        if await self.subscriptions.get_activation(order.id):
            raise BadRequestError("order already activated.")

        try:
            return await self.subscriptions.add_activation(order.id)
        except IntegrityError as e:
            raise BadRequestError("order already activated.", original_error=e)

    async def renew(self, user_id: int, team_id: int) -> Order:
        """
        Append the next order once the paid period has run out.

        The new order is charged at the plan's current price.

        Raises:
            NotFoundError: team missing / not owned
            BadRequestError: no active, paid subscription, or its period
                has not expired yet
        """
        team = await self._owned_team(user_id, team_id)
        subscription = await self._team_subscription(team)

        if not subscription.is_active:
            raise BadRequestError("There is no active subscription for the given team.")

        latest = await self.subscriptions.get_latest_order(subscription.id)
        if latest is None:
            raise BadRequestError("invalid subscription.")

        _, activation = latest
        if activation is None:
            raise BadRequestError("not payed.")

        plan = await self.plans.get_by_id(subscription.plan_id)
        if period_end(activation.created_at, plan.name) > ensure_utc(self.clock()):
            raise BadRequestError("subscription period has not expired.")

        order = await self.subscriptions.add_order(subscription.id, plan.price)
        logger.info(f"Renewed subscription {subscription.id} with order {order.id}")
        return order

    async def get_status(self, user_id: int, team_id: int) -> SubscriptionStatusResponse:
        team = await self._owned_team(user_id, team_id)
        subscription = await self._team_subscription(team)
        plan = await self.plans.get_by_id(subscription.plan_id)

        latest = await self.subscriptions.get_latest_order(subscription.id)
        order, activation = latest if latest else (None, None)
        activated_at = activation.created_at if activation else None

        return SubscriptionStatusResponse(
            subscription_id=subscription.id,
            team_id=team.id,
            plan=PlanRead.model_validate(plan),
            is_active=subscription.is_active,
            latest_order_id=order.id if order else None,
            activated_at=activated_at,
            period_end=period_end(activated_at, plan.name) if activated_at else None,
            active_for_business=is_active_for_business(
                subscription.is_active,
                activated_at,
                plan.name,
                self.clock(),
            ),
        )


class AccountService:
    """Registration, credential checks, email verification and teams."""

    def __init__(self, session: AsyncSession, settings: Settings):
        self.session = session
        self.users = UserRepository(session)
        self.teams = TeamRepository(session)
        self.max_attempts = settings.max_verification_attempts

    async def register(self, data: RegisterRequest) -> User:
        """
        Create an unverified account and its email verification code.

        Raises:
            BadRequestError: email already registered
        """
        if await self.users.get_by_email(data.email):
            raise BadRequestError("email already registered.")

        try:
            user = await self.users.create(
                email=data.email,
                name=data.name,
                hashed_password=hash_password(data.password),
                locale=data.locale,
                timezone=data.timezone,
            )
        except IntegrityError as e:
            raise BadRequestError("email already registered.", original_error=e)

        await self.users.add_verification(
            user.id,
            user.email,
            otp_code=f"{secrets.randbelow(10**6):06d}",
        )
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, email: str, password: str) -> User:
        """
        Raises:
            UnauthorizedError: unknown email or wrong password
        """
        user = await self.users.get_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Rejected login attempt")
            raise UnauthorizedError("Invalid email or password", clear_session=True)
        return user

    async def get_user(self, user_id: int) -> User:
        user = await self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("user not found")
        return user

    async def verify_email(self, user_id: int, email: str, otp_code: str) -> Team:
        """
        Confirm the caller's email and create their personal team.

        Returns:
            The new personal team

        Raises:
            BadRequestError: already verified, no code issued, wrong code,
                or too many attempts
        """
        user = await self.get_user(user_id)
        if user.email_verified:
            raise BadRequestError("email already verified.")

        verification = await self.users.latest_verification(user.id, email)
        if not verification:
            raise BadRequestError("invalid code.")

        if verification.attempts >= self.max_attempts:
            raise BadRequestError("too many attempts.")

        if not secrets.compare_digest(verification.otp_code, otp_code):
            verification.attempts += 1
            # the failed attempt must outlive the request's rollback
            await self.session.commit()
            raise BadRequestError("invalid code.")

        user.email_verified = True
        team = await self.teams.create(
            name=f"{user.name}'s team",
            is_personal=True,
            user_id=user.id,
        )
        logger.info(f"Verified user {user.id}, personal team {team.id}")
        return team

    async def create_team(self, user_id: int, name: str) -> Team:
        return await self.teams.create(name=name, is_personal=False, user_id=user_id)

    async def list_teams(self, user_id: int) -> List[Team]:
        return await self.teams.list_for_user(user_id)
