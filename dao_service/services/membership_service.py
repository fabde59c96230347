#!/usr/bin/env python3
"""Organization membership checks used to gate proposal and comment commands."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.models.organization import Organization


async def is_member(db: AsyncSession, organization_id: int, principal: str) -> bool:
    """
    Whether ``principal`` is the owner or a listed member of the organization.

    A missing organization yields False rather than an error; callers that
    must tell "not found" from "not a member" check existence themselves.
    """
    organization: Optional[Organization] = await db.get(Organization, organization_id)
    if organization is None:
        return False
    return organization.has_member(principal)


def is_owned_by_other(owner: Optional[str], principal: str) -> bool:
    """True when a recorded owner/author exists and differs from ``principal``.

    Rows without an owner accept any caller.
    """
    return owner is not None and owner != principal
