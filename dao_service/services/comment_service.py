#!/usr/bin/env python3
"""Business logic for proposal comments."""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.core.exceptions import (
    NotFoundError,
    NotAMemberError,
    PermissionDeniedError,
    HasVotedError,
    CantLikeYoursError,
)
from dao_service.core.security import Caller
from dao_service.models.comment import Comment
from dao_service.models.organization import Organization
from dao_service.models.proposal import Proposal
from dao_service.schemas.comment import CommentCreate, CommentUpdate
from dao_service.services.id_service import next_id
from dao_service.services.membership_service import is_member, is_owned_by_other

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comments on proposals."""

    @staticmethod
    async def _get_or_404(db: AsyncSession, comment_id: int, action: str) -> Comment:
        comment = await db.get(Comment, comment_id)
        if comment is None:
            raise NotFoundError(
                f"couldn't {action} a comment with id={comment_id}. comment not found"
            )
        return comment

    @staticmethod
    def _require_author(comment: Comment, caller: Caller, action: str) -> None:
        if is_owned_by_other(comment.author, caller.principal):
            raise PermissionDeniedError(
                f"Couldn't {action} comment with id={comment.id}. You are not the owner"
            )

    @staticmethod
    async def create_comment(
        db: AsyncSession,
        caller: Caller,
        data: CommentCreate
    ) -> Comment:
        """
        Comment on a proposal of an organization the caller belongs to.

        Raises:
            NotFoundError: proposal absent
            NotAMemberError: caller is not a member of the proposal's organization
        """
        proposal = await db.get(Proposal, data.proposal_id)
        if proposal is None:
            raise NotFoundError(
                f"cannot comment on proposal with id={data.proposal_id}. Not found"
            )
        if not await is_member(db, proposal.organization_id, caller.principal):
            raise NotAMemberError(
                f"unable to get an organization with id={proposal.organization_id}. Not a member"
            )

        comment_id = await next_id(db)
        proposal.comments = [*proposal.comments, comment_id]
        proposal.updated_at = caller.now

        comment = Comment(
            id=comment_id,
            proposal_id=data.proposal_id,
            content=data.content,
            author=caller.principal,
            likes=[],
            created_at=caller.now,
            updated_at=None,
        )
        db.add(comment)
        await db.flush()

        logger.info(f"Created comment: {comment.id} on proposal {comment.proposal_id}")
        return comment

    @staticmethod
    async def list_comments(
        db: AsyncSession,
        caller: Caller,
        proposal_id: int,
        organization_id: int
    ) -> List[Comment]:
        """
        Comments of a proposal.

        Membership is checked against ``organization_id`` as given; it is not
        derived from the proposal.

        Raises:
            NotAMemberError: caller is not a member of ``organization_id``
            NotFoundError: the comment store is empty
        """
        if not await is_member(db, organization_id, caller.principal):
            raise NotAMemberError(
                f"unable to get an organization with id={organization_id}. Not a member"
            )

        result = await db.execute(select(Comment).order_by(Comment.id))
        comments = list(result.scalars().all())
        if not comments:
            raise NotFoundError("No comments found. Why don't you try creating one")

        return [c for c in comments if c.proposal_id == proposal_id]

    @staticmethod
    async def get_comment(db: AsyncSession, caller: Caller, comment_id: int) -> Comment:
        """Get a single comment; membership is checked against its proposal's organization."""
        comment = await CommentService._get_or_404(db, comment_id, "get")

        proposal = await db.get(Proposal, comment.proposal_id)
        if proposal is None:
            raise NotFoundError(
                f"proposal with id={comment.proposal_id} of comment id={comment_id} not found"
            )
        organization = await db.get(Organization, proposal.organization_id)
        if organization is None:
            raise NotFoundError(
                f"organization with id={proposal.organization_id} of comment id={comment_id} not found"
            )
        if not organization.has_member(caller.principal):
            raise NotAMemberError(
                f"unable to get a comment with id={comment_id}. Not a member"
            )
        return comment

    @staticmethod
    async def update_comment(
        db: AsyncSession,
        caller: Caller,
        comment_id: int,
        data: CommentUpdate
    ) -> Comment:
        """Replace a comment's content. Author only."""
        comment = await CommentService._get_or_404(db, comment_id, "update")
        CommentService._require_author(comment, caller, "update")

        comment.content = data.content
        comment.updated_at = caller.now
        await db.flush()

        logger.info(f"Updated comment: {comment.id}")
        return comment

    @staticmethod
    async def like_comment(
        db: AsyncSession,
        caller: Caller,
        comment_id: int,
        organization_id: int
    ) -> Comment:
        """
        Like a comment once.

        Raises:
            NotFoundError: comment absent
            NotAMemberError: caller is not a member of ``organization_id``
            CantLikeYoursError: caller wrote the comment
            HasVotedError: caller already liked it
        """
        comment = await CommentService._get_or_404(db, comment_id, "like")
        if not await is_member(db, organization_id, caller.principal):
            raise NotAMemberError(
                f"unable to get an organization with id={organization_id}. Not a member"
            )
        if comment.author is not None and comment.author == caller.principal:
            raise CantLikeYoursError(
                f"Couldn't like a comment with id={comment.id} because you created the comment"
            )
        if caller.principal in comment.likes:
            raise HasVotedError(
                f"Couldn't like a comment with id={comment.id}. User has already liked"
            )

        comment.likes = [*comment.likes, caller.principal]
        await db.flush()

        logger.info(f"{caller.principal} liked comment {comment.id}")
        return comment

    @staticmethod
    async def delete_comment(db: AsyncSession, caller: Caller, comment_id: int) -> Comment:
        """Delete a comment and unlink it from its proposal, if the proposal still exists. Author only."""
        comment = await CommentService._get_or_404(db, comment_id, "delete")
        CommentService._require_author(comment, caller, "delete")

        await db.delete(comment)

        proposal = await db.get(Proposal, comment.proposal_id)
        if proposal is not None:
            proposal.comments = [c for c in proposal.comments if c != comment_id]
        await db.flush()

        logger.info(f"Deleted comment: {comment_id}")
        return comment


comment_service = CommentService()
