"""
Plan API Routes

Public plan reads, admin plan writes, and the upgrade price quote.
"""

import logging
from typing import List

from fastapi import APIRouter, Query

from app.api.dependencies import (
    AdminDep,
    PlanServiceDep,
    UpgradeQuoteServiceDep,
    UserDep,
)
from app.domain.subscription import MutationResult, PlanRead, PlanWriteRequest


logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("/plans", response_model=List[PlanRead])
async def list_plans(service: PlanServiceDep):
    """List every plan; an empty list if storage is unavailable."""
    return await service.list_plans()


# =============================================================================
# Upgrade Quote
# =============================================================================

@router.get("/plans/upgrade", response_model=int)
async def quote_upgrade(
    current_user: UserDep,
    service: UpgradeQuoteServiceDep,
    plan_id: int = Query(..., description="Plan to upgrade to"),
    team_id: int = Query(..., description="Team whose subscription is upgraded"),
):
    """
    Price of upgrading a team's paid subscription to a pricier plan now.

    Read-only: no order is placed.
    """
    return await service.compute_upgrade_charge(
        current_user.user_id,
        team_id,
        plan_id,
    )


@router.get("/plans/{plan_id}", response_model=PlanRead)
async def get_plan(plan_id: int, service: PlanServiceDep):
    """Get one plan by ID."""
    return await service.get_plan(plan_id)


# =============================================================================
# Admin Endpoints
# =============================================================================

@router.post("/plans", response_model=MutationResult)
async def create_plan(
    request: PlanWriteRequest,
    admin: AdminDep,
    service: PlanServiceDep,
):
    """
    Create a plan.

    Invalid input is rejected with 422 before anything runs; storage
    failures come back as ``{"success": false}``.
    """
    return MutationResult(success=await service.create_plan(request))


@router.put("/plans/{plan_id}", response_model=MutationResult)
async def update_plan(
    plan_id: int,
    request: PlanWriteRequest,
    admin: AdminDep,
    service: PlanServiceDep,
):
    """Update a plan's name and price; ``{"success": false}`` if it cannot."""
    return MutationResult(success=await service.update_plan(plan_id, request))
