"""Domain error taxonomy shared by every service.

Services raise these; ``frontdesk.main`` turns them into JSON responses of the
form ``{"detail": <message>, "kind": <kind>}`` with the class's status code.
"""

from fastapi import status


class DomainError(Exception):
    """Base class for all user-facing domain failures."""

    kind: str = "domain_error"
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainError):
    """Missing or malformed input the caller can correct."""

    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(DomainError):
    """The request collides with the current state of the aggregate."""

    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class AuthorizationError(DomainError):
    """The acting user's role is not allowed to perform the operation."""

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


# ---------------------------------------------------------------------------
# Specific kinds
# ---------------------------------------------------------------------------


class NotAvailable(ConflictError):
    kind = "room_not_available"


class InUse(ConflictError):
    kind = "in_use"


class BookingNotActive(ConflictError):
    kind = "booking_not_active"


class AlreadyInvoiced(ConflictError):
    kind = "already_invoiced"


class NothingToSettle(ConflictError):
    kind = "nothing_to_settle"


class AlreadySettled(ConflictError):
    kind = "already_settled"


class ItemDisabled(ValidationError):
    kind = "item_disabled"
