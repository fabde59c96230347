#!/usr/bin/env python3
"""API router for proposal comments."""

import logging
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.api.dependencies import get_db, get_caller
from dao_service.core.security import Caller
from dao_service.services.comment_service import comment_service
from dao_service.schemas.comment import CommentCreate, CommentUpdate, CommentResponse
from dao_service.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comments", tags=["Comments"])

_member_errors = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_member_errors
)
async def create_comment(
    comment: CommentCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> CommentResponse:
    return await comment_service.create_comment(db, caller, comment)


@router.get("", response_model=List[CommentResponse], responses=_member_errors)
async def list_comments(
    proposal_id: int = Query(..., description="Proposal to list comments of"),
    organization_id: int = Query(..., description="Organization the caller is a member of"),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> List[CommentResponse]:
    """List the comments of a proposal."""
    return await comment_service.list_comments(db, caller, proposal_id, organization_id)


@router.get("/{comment_id}", response_model=CommentResponse, responses=_member_errors)
async def get_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> CommentResponse:
    return await comment_service.get_comment(db, caller, comment_id)


@router.put("/{comment_id}", response_model=CommentResponse, responses=_member_errors)
async def update_comment(
    comment_id: int,
    comment_update: CommentUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> CommentResponse:
    """Edit a comment. Author only."""
    return await comment_service.update_comment(db, caller, comment_id, comment_update)


@router.post(
    "/{comment_id}/like",
    response_model=CommentResponse,
    responses={**_member_errors, 409: {"model": ErrorResponse}}
)
async def like_comment(
    comment_id: int,
    organization_id: int = Query(..., description="Organization the caller is a member of"),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> CommentResponse:
    """Like a comment once. Authors cannot like their own comments."""
    return await comment_service.like_comment(db, caller, comment_id, organization_id)


@router.delete("/{comment_id}", response_model=CommentResponse, responses=_member_errors)
async def delete_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller)
) -> CommentResponse:
    """Delete a comment. Author only."""
    return await comment_service.delete_comment(db, caller, comment_id)
