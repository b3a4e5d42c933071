"""
Test configuration and fixtures for Team Billing.

Provides shared fixtures for unit and integration tests. Every test that
touches storage gets a fresh in-memory SQLite database.
"""

import os

# Settings are read once at import time; pin them before anything imports app.*
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "testing"

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Optional

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.infrastructure.db.database import DatabaseManager, get_db_manager
from app.infrastructure.db.models import (
    Order,
    Plan,
    Subscription,
    SubscriptionActivation,
    Team,
    User,
)
from app.infrastructure.security.passwords import hash_password
from app.infrastructure.security.tokens import get_token_verifier


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app():
    """Get the FastAPI application."""
    from app.main import app
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Get synchronous test client."""
    return TestClient(app)


@pytest.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    """Fresh schema for one test, dropped again before the engine is disposed."""
    manager = get_db_manager()
    await manager.create_tables()
    yield manager
    await manager.drop_tables()
    await manager.close()


@pytest.fixture
async def async_client(app, db) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client bound to the fresh database."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# =============================================================================
# Auth Fixtures
# =============================================================================

def bearer(user_id: int) -> dict:
    """Authorization header carrying a freshly issued access token."""
    token = get_token_verifier().issue(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers():
    return bearer


# =============================================================================
# Ledger Fixtures
# =============================================================================

class LedgerFactory:
    """
    Seeds rows directly, bypassing the API.

    Each call uses its own short-lived session so nothing stays open
    while requests run against the shared in-memory connection.
    """

    def __init__(self, manager: DatabaseManager):
        self.manager = manager
        self._emails = 0

    async def _save(self, obj):
        async with self.manager.session_factory() as session:
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
        return obj

    async def user(
        self,
        email: Optional[str] = None,
        is_admin: bool = False,
        password: str = "hello world!",
    ) -> User:
        self._emails += 1
        return await self._save(User(
            email=email or f"user{self._emails}@example.com",
            name=f"User {self._emails}",
            hashed_password=hash_password(password),
            is_admin=is_admin,
            locale="en",
            timezone="UTC",
        ))

    async def team(self, user_id: int, name: str = "soso team") -> Team:
        return await self._save(Team(name=name, is_personal=True, user_id=user_id))

    async def plan(self, price: str, name: str = "month") -> Plan:
        return await self._save(Plan(name=name, price=price))

    async def subscription(
        self,
        team_id: int,
        plan_id: int,
        is_active: bool = True,
    ) -> Subscription:
        return await self._save(Subscription(
            team_id=team_id,
            plan_id=plan_id,
            is_active=is_active,
        ))

    async def order(self, subscription_id: int, price: str) -> Order:
        return await self._save(Order(subscription_id=subscription_id, price=price))

    async def activation(
        self,
        order_id: int,
        activated_at: Optional[datetime] = None,
    ) -> SubscriptionActivation:
        activated_at = activated_at or datetime.now(timezone.utc)
        return await self._save(SubscriptionActivation(
            order_id=order_id,
            created_at=activated_at,
            updated_at=activated_at,
        ))

    async def paid_subscription(
        self,
        team_id: int,
        plan: Plan,
        activated_ago: timedelta = timedelta(0),
    ) -> Subscription:
        """Subscription with one order, paid ``activated_ago`` before now."""
        subscription = await self.subscription(team_id, plan.id)
        order = await self.order(subscription.id, plan.price)
        await self.activation(order.id, datetime.now(timezone.utc) - activated_ago)
        return subscription

    async def get(self, model, id: int):
        async with self.manager.session_factory() as session:
            return await session.get(model, id)


@pytest.fixture
def ledger(db) -> LedgerFactory:
    return LedgerFactory(db)
