#!/usr/bin/env python3
"""Caller identity and clock.

Identity is supplied by the hosting environment; this module only
resolves it to an opaque principal string and pairs it with the
request's clock reading.
"""
import time
from dataclasses import dataclass
from typing import Optional

from .config import settings


@dataclass(frozen=True)
class Caller:
    """The principal issuing a command and the time the command runs at.

    Attributes:
        principal: Opaque, comparable identity token
        now: Current time in nanoseconds since the epoch
    """

    principal: str
    now: int

    def is_past(self, deadline: int) -> bool:
        """A deadline has passed only once ``now`` is strictly after it."""
        return self.now > deadline


def now_ns() -> int:
    """Host clock in nanoseconds."""
    return time.time_ns()


def resolve_principal(header_value: Optional[str]) -> Optional[str]:
    """
    Map the principal header to an identity.

    Args:
        header_value: Raw header value, or None when the header is missing

    Returns:
        The principal, the anonymous principal when allowed, or None when
        the request must be rejected as unauthenticated
    """
    if header_value and header_value.strip():
        return header_value.strip()
    if settings.allow_anonymous:
        return settings.anonymous_principal
    return None
