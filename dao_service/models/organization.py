#!/usr/bin/env python3
from sqlalchemy import Column, String, Text, BigInteger
from dao_service.core.database import Base, JSONType


class Organization(Base):
    """A governance group: one owner, a member set and the proposals it holds."""

    __tablename__ = "organizations"

    id = Column(BigInteger, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    avatar = Column(String(500), nullable=False, default="")
    # Absent only for corrupt/default rows
    owner = Column(String(255), nullable=True, index=True)
    members = Column(JSONType, nullable=False, default=list)
    # Ordered proposal ids; kept in sync by cascades, no FK
    proposals = Column(JSONType, nullable=False, default=list)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=True)

    def has_member(self, principal: str) -> bool:
        return self.owner == principal or principal in (self.members or [])

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name})>"
