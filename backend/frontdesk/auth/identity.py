"""Explicit caller identity passed into every service operation."""

import uuid
from dataclasses import dataclass

from frontdesk.errors import AuthorizationError
from frontdesk.models.enums import UserRole


@dataclass(frozen=True)
class Actor:
    """Who is performing an operation. Services never look this up themselves."""

    user_id: uuid.UUID
    role: UserRole

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER

    def require_manager(self, action: str) -> None:
        """Raise ``AuthorizationError`` unless the actor is a manager."""
        if not self.is_manager:
            raise AuthorizationError(f"Only managers may {action}")
