#!/usr/bin/env python3
"""Business logic for the proposal lifecycle.

A proposal is Open while ``now <= deadline``, Closed once the deadline has
passed, and Finalized after its owner ends the vote. Votes and edits need
an open window; finalization and deletion need a closed one.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.core.config import settings
from dao_service.core.exceptions import (
    NotFoundError,
    NotAMemberError,
    PermissionDeniedError,
    HasVotedError,
    CantVoteYoursError,
    DeadlineExceededError,
    DeadlineNotExceededError,
)
from dao_service.core.security import Caller
from dao_service.models.comment import Comment
from dao_service.models.organization import Organization
from dao_service.models.proposal import Proposal
from dao_service.schemas.proposal import ProposalCreate, ProposalUpdate
from dao_service.services.id_service import next_id
from dao_service.services.membership_service import is_member, is_owned_by_other

logger = logging.getLogger(__name__)

UPVOTE = "upvote"
DOWNVOTE = "downvote"


class ProposalService:
    """Service for proposals: creation, edits, votes, finalization, deletion."""

    @staticmethod
    async def _get_or_404(db: AsyncSession, proposal_id: int, action: str) -> Proposal:
        proposal = await db.get(Proposal, proposal_id)
        if proposal is None:
            raise NotFoundError(
                f"couldn't {action} a proposal with id={proposal_id}. proposal not found"
            )
        return proposal

    @staticmethod
    async def _organization_proposals(
        db: AsyncSession,
        caller: Caller,
        organization_id: int
    ) -> List[Proposal]:
        """Membership-gated scan of the proposal store, filtered to one organization."""
        if not await is_member(db, organization_id, caller.principal):
            raise NotAMemberError(
                f"unable to get an organization with id={organization_id}. Not a member"
            )

        result = await db.execute(select(Proposal).order_by(Proposal.id))
        proposals = list(result.scalars().all())
        if not proposals:
            raise NotFoundError("No proposals found")

        return [p for p in proposals if p.organization_id == organization_id]

    @staticmethod
    async def _check_can_vote(db: AsyncSession, caller: Caller, proposal: Proposal) -> None:
        """
        Validate a vote. The first failing check wins:
        membership, not the owner, not upvoted, not downvoted, deadline.
        """
        if not await is_member(db, proposal.organization_id, caller.principal):
            raise NotAMemberError(
                f"unable to vote on a proposal with id={proposal.id}. Not a member"
            )
        if proposal.owner is not None and proposal.owner == caller.principal:
            raise CantVoteYoursError(
                f"Couldn't vote on a proposal with id={proposal.id} because you created the proposal"
            )
        if caller.principal in proposal.upvotes:
            raise HasVotedError(
                f"Couldn't vote on a proposal with id={proposal.id}. user voted already"
            )
        if caller.principal in proposal.downvotes:
            raise HasVotedError(
                f"Couldn't vote on a proposal with id={proposal.id}. user voted already"
            )
        if caller.is_past(proposal.deadline):
            raise DeadlineExceededError(
                f"Couldn't vote on a proposal with id={proposal.id}. Deadline exceeded"
            )

    @staticmethod
    async def create_proposal(
        db: AsyncSession,
        caller: Caller,
        data: ProposalCreate
    ) -> Proposal:
        """
        Submit a proposal to an organization the caller belongs to.

        Raises:
            NotAMemberError: caller is not a member, or the organization is absent
        """
        if not await is_member(db, data.organization_id, caller.principal):
            raise NotAMemberError(
                f"unable to get an organization with id={data.organization_id}. Not a member"
            )

        proposal_id = await next_id(db)

        organization = await db.get(Organization, data.organization_id)
        organization.proposals = [*organization.proposals, proposal_id]
        organization.updated_at = caller.now

        proposal = Proposal(
            id=proposal_id,
            organization_id=data.organization_id,
            title=data.title,
            details=data.details,
            amount_requested=data.amount_requested,
            owner=caller.principal,
            upvotes=[],
            downvotes=[],
            is_approved=False,
            comments=[],
            created_at=caller.now,
            deadline=caller.now + settings.voting_window_ns,
            updated_at=None,
        )
        db.add(proposal)
        await db.flush()

        logger.info(
            f"Created proposal: {proposal.id} in organization {proposal.organization_id} "
            f"amount={proposal.amount_requested} deadline={proposal.deadline}"
        )
        return proposal

    @staticmethod
    async def get_proposal(db: AsyncSession, caller: Caller, proposal_id: int) -> Proposal:
        """
        Get a proposal of an organization the caller belongs to.

        Raises:
            NotFoundError: proposal absent, or its organization is gone
            NotAMemberError: caller is not a member of its organization
        """
        proposal = await ProposalService._get_or_404(db, proposal_id, "get")

        organization = await db.get(Organization, proposal.organization_id)
        if organization is None:
            raise NotFoundError(
                f"organization with id={proposal.organization_id} of proposal id={proposal_id} not found"
            )
        if not organization.has_member(caller.principal):
            raise NotAMemberError(
                f"unable to get a proposal with id={proposal_id}. Not a member"
            )
        return proposal

    @staticmethod
    async def list_proposals(
        db: AsyncSession,
        caller: Caller,
        organization_id: int
    ) -> List[Proposal]:
        """All proposals of an organization."""
        return await ProposalService._organization_proposals(db, caller, organization_id)

    @staticmethod
    async def list_finalized_approved_proposals(
        db: AsyncSession,
        caller: Caller,
        organization_id: int
    ) -> List[Proposal]:
        """Approved proposals of an organization whose deadline has not passed."""
        proposals = await ProposalService._organization_proposals(db, caller, organization_id)
        return [p for p in proposals if p.is_approved and not caller.is_past(p.deadline)]

    @staticmethod
    async def update_proposal(
        db: AsyncSession,
        caller: Caller,
        proposal_id: int,
        data: ProposalUpdate
    ) -> Proposal:
        """
        Edit title, details and amount. Owner only, while the vote is open.

        Raises:
            NotFoundError, PermissionDeniedError, DeadlineExceededError
        """
        proposal = await ProposalService._get_or_404(db, proposal_id, "update")
        if is_owned_by_other(proposal.owner, caller.principal):
            raise PermissionDeniedError(
                f"Couldn't update proposal with id={proposal_id}. You are not the owner"
            )
        if caller.is_past(proposal.deadline):
            raise DeadlineExceededError(
                f"Couldn't update a proposal with id={proposal_id}. Deadline exceeded"
            )

        proposal.title = data.title
        proposal.details = data.details
        proposal.amount_requested = data.amount_requested
        proposal.updated_at = caller.now
        await db.flush()

        logger.info(f"Updated proposal: {proposal.id}")
        return proposal

    @staticmethod
    async def _cast_vote(
        db: AsyncSession,
        caller: Caller,
        proposal_id: int,
        direction: str
    ) -> Proposal:
        proposal = await ProposalService._get_or_404(db, proposal_id, "vote on")
        await ProposalService._check_can_vote(db, caller, proposal)

        if direction == UPVOTE:
            proposal.upvotes = [*proposal.upvotes, caller.principal]
        else:
            proposal.downvotes = [*proposal.downvotes, caller.principal]
        await db.flush()

        logger.info(f"{caller.principal} cast {direction} on proposal {proposal.id}")
        return proposal

    @staticmethod
    async def upvote_proposal(db: AsyncSession, caller: Caller, proposal_id: int) -> Proposal:
        """Vote for a proposal. See ``_check_can_vote`` for the rejection order."""
        return await ProposalService._cast_vote(db, caller, proposal_id, UPVOTE)

    @staticmethod
    async def downvote_proposal(db: AsyncSession, caller: Caller, proposal_id: int) -> Proposal:
        """Vote against a proposal. See ``_check_can_vote`` for the rejection order."""
        return await ProposalService._cast_vote(db, caller, proposal_id, DOWNVOTE)

    @staticmethod
    async def end_proposal_vote(db: AsyncSession, caller: Caller, proposal_id: int) -> Proposal:
        """
        Finalize a proposal once its deadline has passed. Owner only.

        ``is_approved`` is set when downvotes outnumber upvotes. Running it
        again recomputes the flag from the current vote sets.

        Raises:
            NotFoundError, PermissionDeniedError, DeadlineNotExceededError
        """
        proposal = await ProposalService._get_or_404(db, proposal_id, "end the vote of")
        if is_owned_by_other(proposal.owner, caller.principal):
            raise PermissionDeniedError(
                f"Couldn't end the vote of proposal with id={proposal_id}. You are not the owner"
            )
        if not caller.is_past(proposal.deadline):
            raise DeadlineNotExceededError(
                f"Voting period for proposal with id={proposal_id} isn't over."
            )

        proposal.is_approved = len(proposal.downvotes) > len(proposal.upvotes)
        await db.flush()

        logger.info(
            f"Finalized proposal {proposal.id}: up={len(proposal.upvotes)} "
            f"down={len(proposal.downvotes)} approved={proposal.is_approved}"
        )
        return proposal

    @staticmethod
    async def delete_proposal(db: AsyncSession, caller: Caller, proposal_id: int) -> Proposal:
        """
        Delete a closed proposal. Owner only.

        Order: proposal row, its id in the organization's list (skipped when
        the organization is gone), then every listed comment.

        Raises:
            NotFoundError, PermissionDeniedError, DeadlineExceededError
        """
        proposal = await ProposalService._get_or_404(db, proposal_id, "delete")
        if is_owned_by_other(proposal.owner, caller.principal):
            raise PermissionDeniedError(
                f"Couldn't delete a proposal with id={proposal_id}. You are not the owner"
            )
        if not caller.is_past(proposal.deadline):
            raise DeadlineExceededError(
                f"Couldn't delete a proposal with id={proposal_id} while its vote is open"
            )

        await db.delete(proposal)

        organization = await db.get(Organization, proposal.organization_id)
        if organization is not None:
            organization.proposals = [p for p in organization.proposals if p != proposal_id]

        removed = 0
        for comment_id in proposal.comments or []:
            comment = await db.get(Comment, comment_id)
            if comment is not None:
                await db.delete(comment)
                removed += 1
        await db.flush()

        logger.info(f"Deleted proposal: {proposal_id} (cascaded {removed} comments)")
        return proposal


proposal_service = ProposalService()
