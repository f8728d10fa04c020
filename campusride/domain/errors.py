"""
Domain error taxonomy.

Every failure raised by the ride services is a ``DomainError`` subclass
carrying a machine-readable ``code``.  The API layer maps each class to an
HTTP status (see ``campusride.api.errors``); the domain never knows about
HTTP.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for all ride workflow failures."""

    code = "domain_error"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ValidationError(DomainError):
    """Malformed input (bad attributes, out-of-range score, ...)."""

    code = "validation_error"


class NotFoundError(DomainError):
    """Referenced ride or request does not exist."""

    code = "not_found"


class ForbiddenError(DomainError):
    """Caller is not allowed to perform the action."""

    code = "forbidden"


class SelfRequestError(DomainError):
    """A ride's creator tried to request a seat on their own ride."""

    code = "self_request"


class SelfRatingError(DomainError):
    """A ride's creator tried to rate their own ride."""

    code = "self_rating"


class InvalidStateError(DomainError):
    """Action is not valid for the record's current lifecycle state."""

    code = "invalid_state"


class InvalidTransitionError(DomainError):
    """Requested status change violates the state machine."""

    code = "invalid_transition"
