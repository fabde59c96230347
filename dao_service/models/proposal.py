#!/usr/bin/env python3
"""Proposal ORM model for spending requests under vote."""

from sqlalchemy import Column, String, Text, BigInteger, Boolean, CheckConstraint
from dao_service.core.database import Base, JSONType


class Proposal(Base):
    """Spending request with a fixed voting window."""

    __tablename__ = "proposals"

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    # Free-form organization reference (no FK constraint)
    organization_id = Column(BigInteger, nullable=False, index=True)
    title = Column(String(200), nullable=False)
    details = Column(Text, nullable=False, default="")
    amount_requested = Column(BigInteger, nullable=False, default=0)
    owner = Column(String(255), nullable=True)
    upvotes = Column(JSONType, nullable=False, default=list)
    downvotes = Column(JSONType, nullable=False, default=list)
    is_approved = Column(Boolean, nullable=False, default=False)
    comments = Column(JSONType, nullable=False, default=list)
    created_at = Column(BigInteger, nullable=False)
    deadline = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=True)

    __table_args__ = (
        CheckConstraint("amount_requested >= 0", name="ck_proposal_amount_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Proposal(id={self.id}, organization_id={self.organization_id}, title={self.title})>"
