#!/usr/bin/env python3
"""API router for organizations and their membership."""

import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.api.dependencies import get_db, get_caller
from dao_service.core.security import Caller
from dao_service.services.organization_service import organization_service
from dao_service.schemas.organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
    MemberRequest,
)
from dao_service.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/organizations", tags=["Organizations"])


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    organization: OrganizationCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> OrganizationResponse:
    """Create an organization owned by the caller."""
    return await organization_service.create_organization(db, caller, organization)


@router.get(
    "",
    response_model=List[OrganizationResponse],
    responses={404: {"model": ErrorResponse}}
)
async def list_my_organizations(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> List[OrganizationResponse]:
    """List organizations the caller owns or belongs to."""
    return await organization_service.list_my_organizations(db, caller)


@router.get(
    "/{organization_id}",
    response_model=OrganizationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def get_organization(
    organization_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> OrganizationResponse:
    """Get an organization. Members only."""
    return await organization_service.get_organization(db, caller, organization_id)


@router.put(
    "/{organization_id}",
    response_model=OrganizationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_organization(
    organization_id: int,
    organization_update: OrganizationUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> OrganizationResponse:
    """Replace an organization's name, description and avatar. Owner only."""
    return await organization_service.update_organization(db, caller, organization_id, organization_update)


@router.delete(
    "/{organization_id}",
    response_model=OrganizationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def delete_organization(
    organization_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> OrganizationResponse:
    """Delete an organization and its proposals. Owner only."""
    return await organization_service.delete_organization(db, caller, organization_id)


@router.post(
    "/{organization_id}/members",
    response_model=OrganizationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def add_member(
    organization_id: int,
    member: MemberRequest,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> OrganizationResponse:
    """Add a member. Owner only."""
    return await organization_service.add_member(db, caller, organization_id, member.principal)


@router.delete(
    "/{organization_id}/members/{principal}",
    response_model=OrganizationResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def remove_member(
    organization_id: int,
    principal: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> OrganizationResponse:
    """Remove a member. Owner only."""
    return await organization_service.remove_member(db, caller, organization_id, principal)
