#!/usr/bin/env python3
from dao_service.core.database import Base
from .organization import Organization
from .proposal import Proposal
from .comment import Comment
from .id_counter import IdCounter

__all__ = [
    "Base",
    "Organization",
    "Proposal",
    "Comment",
    "IdCounter",
]
