#!/usr/bin/env python3
"""Business logic for the organization registry."""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.core.exceptions import NotFoundError, NotAMemberError, PermissionDeniedError
from dao_service.core.security import Caller
from dao_service.models.organization import Organization
from dao_service.models.proposal import Proposal
from dao_service.schemas.organization import OrganizationCreate, OrganizationUpdate
from dao_service.services.id_service import next_id
from dao_service.services.membership_service import is_owned_by_other

logger = logging.getLogger(__name__)


class OrganizationService:
    """Service for creating, reading, editing and deleting organizations."""

    @staticmethod
    async def _get_or_404(db: AsyncSession, organization_id: int, action: str) -> Organization:
        organization = await db.get(Organization, organization_id)
        if organization is None:
            raise NotFoundError(
                f"couldn't {action} an organization with id={organization_id}. organization not found"
            )
        return organization

    @staticmethod
    def _require_owner(organization: Organization, caller: Caller, action: str) -> None:
        if is_owned_by_other(organization.owner, caller.principal):
            raise PermissionDeniedError(
                f"Couldn't {action} organization with id={organization.id}. You are not the owner"
            )

    @staticmethod
    async def create_organization(
        db: AsyncSession,
        caller: Caller,
        data: OrganizationCreate
    ) -> Organization:
        """Create an organization owned by the caller."""
        organization = Organization(
            id=await next_id(db),
            name=data.name,
            description=data.description,
            avatar=data.avatar,
            owner=caller.principal,
            members=[],
            proposals=[],
            created_at=caller.now,
            updated_at=None,
        )
        db.add(organization)
        await db.flush()

        logger.info(f"Created organization: {organization.id} ({organization.name}) owner={caller.principal}")
        return organization

    @staticmethod
    async def get_organization(
        db: AsyncSession,
        caller: Caller,
        organization_id: int
    ) -> Organization:
        """
        Get an organization the caller belongs to.

        Raises:
            NotFoundError: organization absent
            NotAMemberError: caller is neither owner nor member
        """
        organization = await OrganizationService._get_or_404(db, organization_id, "get")
        if not organization.has_member(caller.principal):
            raise NotAMemberError(
                f"unable to get an organization with id={organization_id}. Not a member"
            )
        return organization

    @staticmethod
    async def list_my_organizations(db: AsyncSession, caller: Caller) -> List[Organization]:
        """
        List organizations the caller owns or is a member of.

        Raises:
            NotFoundError: the registry holds no organization at all
        """
        result = await db.execute(select(Organization).order_by(Organization.id))
        organizations = list(result.scalars().all())
        if not organizations:
            raise NotFoundError(
                "No organization found. Why don't you try joining or creating one"
            )
        return [o for o in organizations if o.has_member(caller.principal)]

    @staticmethod
    async def update_organization(
        db: AsyncSession,
        caller: Caller,
        organization_id: int,
        data: OrganizationUpdate
    ) -> Organization:
        """Replace name, description and avatar. Owner only."""
        organization = await OrganizationService._get_or_404(db, organization_id, "update")
        OrganizationService._require_owner(organization, caller, "update")

        organization.name = data.name
        organization.description = data.description
        organization.avatar = data.avatar
        organization.updated_at = caller.now
        await db.flush()

        logger.info(f"Updated organization: {organization.id}")
        return organization

    @staticmethod
    async def delete_organization(
        db: AsyncSession,
        caller: Caller,
        organization_id: int
    ) -> Organization:
        """
        Delete an organization and the proposals it lists. Owner only.

        Order: organization row first, then each listed proposal. Comments of
        those proposals are left in place.
        """
        organization = await OrganizationService._get_or_404(db, organization_id, "delete")
        OrganizationService._require_owner(organization, caller, "delete")

        await db.delete(organization)

        removed = 0
        for proposal_id in organization.proposals or []:
            proposal = await db.get(Proposal, proposal_id)
            if proposal is not None:
                await db.delete(proposal)
                removed += 1
        await db.flush()

        logger.info(f"Deleted organization: {organization_id} (cascaded {removed} proposals)")
        return organization

    @staticmethod
    async def add_member(
        db: AsyncSession,
        caller: Caller,
        organization_id: int,
        principal: str
    ) -> Organization:
        """Add a member. Owner only; adding an existing member changes nothing."""
        organization = await OrganizationService._get_or_404(db, organization_id, "update")
        OrganizationService._require_owner(organization, caller, "add a member to")

        if organization.has_member(principal):
            return organization

        organization.members = [*organization.members, principal]
        organization.updated_at = caller.now
        await db.flush()

        logger.info(f"Added member {principal} to organization {organization.id}")
        return organization

    @staticmethod
    async def remove_member(
        db: AsyncSession,
        caller: Caller,
        organization_id: int,
        principal: str
    ) -> Organization:
        """Remove a listed member. Owner only."""
        organization = await OrganizationService._get_or_404(db, organization_id, "update")
        OrganizationService._require_owner(organization, caller, "remove a member from")

        if principal not in (organization.members or []):
            raise NotFoundError(
                f"{principal} is not a member of organization with id={organization_id}"
            )

        organization.members = [m for m in organization.members if m != principal]
        organization.updated_at = caller.now
        await db.flush()

        logger.info(f"Removed member {principal} from organization {organization.id}")
        return organization


organization_service = OrganizationService()
