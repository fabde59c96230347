#!/usr/bin/env python3
"""Pydantic schemas for proposals."""

from pydantic import BaseModel, Field
from typing import List, Optional

# Largest amount the signed 64-bit column holds
MAX_AMOUNT = 2 ** 63 - 1


class ProposalBase(BaseModel):
    """Editable proposal fields."""
    title: str = Field(..., min_length=1, max_length=200)
    details: str = ""
    amount_requested: int = Field(default=0, ge=0, le=MAX_AMOUNT)


class ProposalCreate(ProposalBase):
    """Schema for submitting a proposal to an organization."""
    organization_id: int = Field(..., ge=0)


class ProposalUpdate(ProposalBase):
    """Schema for editing a proposal while its vote is open."""
    pass


class ProposalResponse(ProposalBase):
    """Schema for proposal response."""
    id: int
    details: str
    amount_requested: int
    organization_id: int
    owner: Optional[str] = None
    upvotes: List[str]
    downvotes: List[str]
    is_approved: bool
    comments: List[int]
    created_at: int
    deadline: int
    updated_at: Optional[int] = None

    class Config:
        from_attributes = True
