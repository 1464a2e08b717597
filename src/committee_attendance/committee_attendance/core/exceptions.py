from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations.

    ``reason`` is a short machine-checkable code naming the violated rule so
    clients can render precise guidance.
    """

    status_code = 400
    default_reason = "domain_error"

    def __init__(self, message: str, *, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.reason = reason or self.default_reason


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400
    default_reason = "bad_request"


class AuthenticationError(DomainError):
    """Raised when the caller credential is missing or invalid."""

    status_code = 401
    default_reason = "unauthorized"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    status_code = 403
    default_reason = "forbidden"


class NotFoundError(DomainError):
    """Raised when a referenced team/event/member does not exist."""

    status_code = 404
    default_reason = "not_found"


class LocationRequiredError(ValidationError):
    default_reason = "location_required"


class OutsideVenueError(AuthorizationError):
    default_reason = "outside_venue"
