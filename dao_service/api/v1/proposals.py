#!/usr/bin/env python3
"""API router for proposals and voting."""

import logging
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.api.dependencies import get_db, get_caller
from dao_service.core.security import Caller
from dao_service.services.proposal_service import proposal_service
from dao_service.schemas.proposal import ProposalCreate, ProposalUpdate, ProposalResponse
from dao_service.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/proposals", tags=["Proposals"])

_member_errors = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
_vote_errors = {**_member_errors, 409: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=ProposalResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}}
)
async def create_proposal(
    proposal: ProposalCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    """Submit a proposal. Voting stays open for one week."""
    return await proposal_service.create_proposal(db, caller, proposal)


@router.get("", response_model=List[ProposalResponse], responses=_member_errors)
async def list_proposals(
    organization_id: int = Query(..., description="Organization to list proposals of"),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> List[ProposalResponse]:
    """List every proposal of an organization."""
    return await proposal_service.list_proposals(db, caller, organization_id)


@router.get("/approved", response_model=List[ProposalResponse], responses=_member_errors)
async def list_finalized_approved_proposals(
    organization_id: int = Query(..., description="Organization to list proposals of"),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> List[ProposalResponse]:
    """List approved proposals whose deadline has not passed."""
    return await proposal_service.list_finalized_approved_proposals(db, caller, organization_id)


@router.get("/{proposal_id}", response_model=ProposalResponse, responses=_member_errors)
async def get_proposal(
    proposal_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    return await proposal_service.get_proposal(db, caller, proposal_id)


@router.put("/{proposal_id}", response_model=ProposalResponse, responses=_vote_errors)
async def update_proposal(
    proposal_id: int,
    proposal_update: ProposalUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    """Edit a proposal while its vote is open. Owner only."""
    return await proposal_service.update_proposal(db, caller, proposal_id, proposal_update)


@router.post("/{proposal_id}/upvote", response_model=ProposalResponse, responses=_vote_errors)
async def upvote_proposal(
    proposal_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    return await proposal_service.upvote_proposal(db, caller, proposal_id)


@router.post("/{proposal_id}/downvote", response_model=ProposalResponse, responses=_vote_errors)
async def downvote_proposal(
    proposal_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    return await proposal_service.downvote_proposal(db, caller, proposal_id)


@router.post("/{proposal_id}/end-vote", response_model=ProposalResponse, responses=_vote_errors)
async def end_proposal_vote(
    proposal_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    """Finalize a proposal after its deadline. Owner only."""
    return await proposal_service.end_proposal_vote(db, caller, proposal_id)


@router.delete("/{proposal_id}", response_model=ProposalResponse, responses=_vote_errors)
async def delete_proposal(
    proposal_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> ProposalResponse:
    """Delete a proposal and its comments once voting has closed. Owner only."""
    return await proposal_service.delete_proposal(db, caller, proposal_id)
