#!/usr/bin/env python3
from typing import Callable

from fastapi import Depends, HTTPException, Request, status

from dao_service.core.config import settings
from dao_service.core.database import get_db
from dao_service.core.security import Caller, now_ns, resolve_principal


def get_clock() -> Callable[[], int]:
    """Dependency for the nanosecond clock. Tests override it to move time."""
    return now_ns


async def get_caller(
    request: Request,
    clock: Callable[[], int] = Depends(get_clock)
) -> Caller:
    """Resolve the calling principal from the identity header and stamp the request time."""
    principal = resolve_principal(request.headers.get(settings.principal_header))
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "error": {
                    "code": "Unauthenticated",
                    "message": f"Missing {settings.principal_header} header"
                }
            }
        )
    return Caller(principal=principal, now=clock())


# Re-export get_db for convenience
__all__ = ["get_db", "get_clock", "get_caller"]
