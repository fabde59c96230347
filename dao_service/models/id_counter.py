#!/usr/bin/env python3
from sqlalchemy import Column, String, BigInteger
from dao_service.core.database import Base


class IdCounter(Base):
    """Named monotonically increasing counter. ``value`` is the next id to hand out."""

    __tablename__ = "id_counters"

    name = Column(String(50), primary_key=True)
    value = Column(BigInteger, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<IdCounter(name={self.name}, value={self.value})>"
