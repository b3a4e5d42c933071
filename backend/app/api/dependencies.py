"""
API Dependencies

FastAPI dependency injection for access control and domain services.

Access levels compose: a route is public (no dependency), user-level
(``require_user``) or admin-level (``require_admin``, which runs
``require_user`` first). Token verification never touches the database;
only the admin level pays for a storage lookup.

Security: the caller's identity comes only from the access token carried
by the transport (cookie, or Authorization header), never from the
request body or query string.
"""

import logging
from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import SQLAlchemyError

from app.config.settings import Settings, get_settings
from app.domain.services import (
    AccountService,
    BillingLedgerService,
    PlanService,
    UpgradeQuoteService,
)
from app.infrastructure.db.dependencies import SessionDep, UserRepoDep
from app.infrastructure.exceptions import InvalidTokenError, UnauthorizedError
from app.infrastructure.security.tokens import TokenVerifier, get_token_verifier


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

SettingsDep = Annotated[Settings, Depends(get_settings)]


@dataclass(frozen=True)
class CurrentUser:
    """Verified identity handed to user- and admin-level routes."""
    user_id: int


def extract_access_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
    settings: Settings,
) -> Optional[str]:
    """Session cookie first, then an ``Authorization: Bearer`` header."""
    token = request.cookies.get(settings.access_cookie_name)
    if token:
        return token
    if credentials:
        return credentials.credentials
    return None


async def require_user(
    request: Request,
    settings: SettingsDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> CurrentUser:
    """
    Verify the caller's access token.

    Returns:
        The verified ``CurrentUser``

    Raises:
        UnauthorizedError: token missing, expired or invalid; the session
            cookies are cleared on the way out
    """
    token = extract_access_token(request, credentials, settings)
    try:
        claims = verifier.verify(token)
    except InvalidTokenError as e:
        logger.warning("Rejected access token: %s", e.message)
        raise UnauthorizedError(e.message, clear_session=True, original_error=e)

    return CurrentUser(user_id=claims.user_id)


async def require_admin(
    current_user: Annotated[CurrentUser, Depends(require_user)],
    users: UserRepoDep,
) -> CurrentUser:
    """
    Verify the caller is an administrator.

    A missing account, a non-admin account and a failed lookup are all
    reported the same way, so the response never reveals which it was.

    Raises:
        UnauthorizedError: token invalid (via ``require_user``) or the
            identity does not belong to an admin
    """
    try:
        admin = await users.get_admin(current_user.user_id)
    except SQLAlchemyError as e:
        logger.error(f"Admin lookup failed for user {current_user.user_id}: {e}")
        admin = None

    if admin is None:
        logger.warning(f"User {current_user.user_id} denied admin access")
        raise UnauthorizedError()

    return CurrentUser(user_id=admin.id)


UserDep = Annotated[CurrentUser, Depends(require_user)]
AdminDep = Annotated[CurrentUser, Depends(require_admin)]


# =============================================================================
# Service providers
# =============================================================================

def get_plan_service(session: SessionDep) -> PlanService:
    return PlanService(session)


def get_upgrade_quote_service(
    session: SessionDep,
    settings: SettingsDep,
) -> UpgradeQuoteService:
    return UpgradeQuoteService(session, settings)


def get_ledger_service(session: SessionDep) -> BillingLedgerService:
    return BillingLedgerService(session)


def get_account_service(
    session: SessionDep,
    settings: SettingsDep,
) -> AccountService:
    return AccountService(session, settings)


PlanServiceDep = Annotated[PlanService, Depends(get_plan_service)]
UpgradeQuoteServiceDep = Annotated[UpgradeQuoteService, Depends(get_upgrade_quote_service)]
LedgerServiceDep = Annotated[BillingLedgerService, Depends(get_ledger_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
