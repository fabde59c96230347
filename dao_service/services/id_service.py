#!/usr/bin/env python3
"""Global identifier generator shared by organizations, proposals and comments."""

from sqlalchemy.ext.asyncio import AsyncSession

from dao_service.models.id_counter import IdCounter

GLOBAL_COUNTER = "global"


async def next_id(db: AsyncSession) -> int:
    """
    Hand out the next identifier.

    Returns the counter's current value and stores value + 1, so the
    first id is 0 and ids never repeat across entity kinds.

    Args:
        db: Database session

    Returns:
        A fresh identifier
    """
    counter = await db.get(IdCounter, GLOBAL_COUNTER)
    if counter is None:
        counter = IdCounter(name=GLOBAL_COUNTER, value=0)
        db.add(counter)

    current = counter.value
    counter.value = current + 1
    await db.flush()
    return current
