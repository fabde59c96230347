"""Governance errors.

Every rejected command raises one of these. They are never recovered
inside the service layer; the HTTP layer renders them as an
``ErrorResponse`` using ``code`` and ``status_code``.
"""


class GovernanceError(Exception):
    """Base class for all governance command failures."""

    code = "GovernanceError"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GovernanceError):
    """Raised when a referenced organization, proposal or comment is absent."""

    code = "NotFound"
    status_code = 404


class NotAMemberError(GovernanceError):
    """Raised when the caller is neither owner nor member of the organization."""

    code = "NotAMember"
    status_code = 403


class PermissionDeniedError(GovernanceError):
    """Raised when the caller is not the owner or author of the resource."""

    code = "PermissionError"
    status_code = 403


class HasVotedError(GovernanceError):
    """Raised on a second vote on a proposal or a second like on a comment."""

    code = "HasVoted"
    status_code = 409


class CantVoteYoursError(GovernanceError):
    """Raised when a proposal owner tries to vote on their own proposal."""

    code = "CantVoteYours"
    status_code = 409


class CantLikeYoursError(GovernanceError):
    """Raised when a comment author tries to like their own comment."""

    code = "CantLikeYours"
    status_code = 409


class DeadlineExceededError(GovernanceError):
    """Raised when the command needs an open voting window but it has closed."""

    code = "DeadlineExceeded"
    status_code = 409


class DeadlineNotExceededError(GovernanceError):
    """Raised when the command needs a closed voting window but it is still open."""

    code = "DeadlineNotExceeded"
    status_code = 409
