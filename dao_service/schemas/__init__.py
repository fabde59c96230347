from .organization import (
    OrganizationCreate,
    OrganizationUpdate,
    OrganizationResponse,
    MemberRequest,
)
from .proposal import ProposalCreate, ProposalUpdate, ProposalResponse
from .comment import CommentCreate, CommentUpdate, CommentResponse
from .health import HealthCheckResponse
from .common import ErrorResponse

__all__ = [
    "OrganizationCreate",
    "OrganizationUpdate",
    "OrganizationResponse",
    "MemberRequest",
    "ProposalCreate",
    "ProposalUpdate",
    "ProposalResponse",
    "CommentCreate",
    "CommentUpdate",
    "CommentResponse",
    "HealthCheckResponse",
    "ErrorResponse",
]
