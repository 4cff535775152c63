"""Shared API dependencies — single import point for all routers.

Re-exports database session and authentication dependencies so that router
modules can import everything they need from one place::

    from frontdesk.api.deps import get_actor, get_db
"""

from frontdesk.auth.dependencies import (
    get_actor,
    get_current_active_user,
    get_current_user,
    require_manager,
)
from frontdesk.database import get_db

__all__ = [
    "get_db",
    "get_current_user",
    "get_current_active_user",
    "get_actor",
    "require_manager",
]
