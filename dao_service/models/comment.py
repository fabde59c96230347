#!/usr/bin/env python3
from sqlalchemy import Column, String, Text, BigInteger
from dao_service.core.database import Base, JSONType


class Comment(Base):
    """Discussion entry attached to a proposal."""

    __tablename__ = "comments"

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    proposal_id = Column(BigInteger, nullable=False, index=True)
    content = Column(Text, nullable=False)
    author = Column(String(255), nullable=True)
    likes = Column(JSONType, nullable=False, default=list)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=True)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, proposal_id={self.proposal_id})>"
