"""
Team API Routes
"""

from typing import List

from fastapi import APIRouter, status

from app.api.dependencies import AccountServiceDep, UserDep
from app.domain.accounts import TeamCreateRequest, TeamRead


router = APIRouter()


@router.get("/teams", response_model=List[TeamRead])
async def list_teams(current_user: UserDep, service: AccountServiceDep):
    """Teams owned by the caller."""
    return await service.list_teams(current_user.user_id)


@router.post("/teams", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
async def create_team(
    request: TeamCreateRequest,
    current_user: UserDep,
    service: AccountServiceDep,
):
    """Create an organizational (non-personal) team owned by the caller."""
    return await service.create_team(current_user.user_id, request.name)
