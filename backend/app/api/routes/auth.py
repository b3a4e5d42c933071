"""
Auth API Routes

Registration, cookie-based login/logout and email verification.
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from app.api.dependencies import (
    AccountServiceDep,
    SettingsDep,
    UserDep,
)
from app.domain.accounts import (
    LoginRequest,
    RegisterRequest,
    UserRead,
    VerifyEmailRequest,
    VerifyEmailResponse,
)
from app.domain.subscription import MutationResult
from app.infrastructure.security.cookies import clear_session_cookies, set_session_cookie
from app.infrastructure.security.tokens import TokenVerifier, get_token_verifier


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth")


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, service: AccountServiceDep):
    """
    Create an account.

    A verification code is stored for the address; delivering it is left
    to the outside world.
    """
    return await service.register(request)


@router.post("/login", response_model=MutationResult)
async def login(
    request: LoginRequest,
    response: Response,
    service: AccountServiceDep,
    settings: SettingsDep,
    verifier: TokenVerifier = Depends(get_token_verifier),
):
    """Check credentials and set the session cookie."""
    user = await service.authenticate(request.email, request.password)
    token = verifier.issue(user.id)
    set_session_cookie(response, token, settings)

    logger.info(f"User {user.id} logged in")
    return MutationResult(success=True)


@router.post("/logout", response_model=MutationResult)
async def logout(response: Response, settings: SettingsDep):
    clear_session_cookies(response, settings)
    return MutationResult(success=True)


@router.get("/me", response_model=UserRead)
async def me(current_user: UserDep, service: AccountServiceDep):
    return await service.get_user(current_user.user_id)


@router.post("/verify-email", response_model=VerifyEmailResponse)
async def verify_email(
    request: VerifyEmailRequest,
    current_user: UserDep,
    service: AccountServiceDep,
):
    """Confirm the caller's email with their code; creates the personal team."""
    team = await service.verify_email(
        current_user.user_id,
        request.email,
        request.otp_code,
    )
    return VerifyEmailResponse(team_id=team.id)
