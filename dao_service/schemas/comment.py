#!/usr/bin/env python3
from pydantic import BaseModel, Field
from typing import List, Optional


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1)
    proposal_id: int = Field(..., ge=0)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1)


class CommentResponse(BaseModel):
    id: int
    proposal_id: int
    content: str
    author: Optional[str] = None
    likes: List[str]
    created_at: int
    updated_at: Optional[int] = None

    class Config:
        from_attributes = True
