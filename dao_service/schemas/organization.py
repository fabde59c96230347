#!/usr/bin/env python3
"""Pydantic schemas for organization CRUD and membership."""

from pydantic import BaseModel, Field
from typing import List, Optional


class OrganizationBase(BaseModel):
    """Mutable organization fields."""
    name: str = Field(..., min_length=1, max_length=100)
    description: str = ""
    avatar: str = Field(default="", max_length=500)


class OrganizationCreate(OrganizationBase):
    """Schema for creating an organization. The caller becomes the owner."""
    pass


class OrganizationUpdate(OrganizationBase):
    """Schema for replacing an organization's mutable fields."""
    pass


class MemberRequest(BaseModel):
    """Principal to add to an organization."""
    principal: str = Field(..., min_length=1, max_length=255)


class OrganizationResponse(OrganizationBase):
    """Schema for organization response."""
    id: int
    description: str
    avatar: str
    owner: Optional[str] = None
    members: List[str]
    proposals: List[int]
    created_at: int
    updated_at: Optional[int] = None

    class Config:
        from_attributes = True
