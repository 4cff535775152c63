"""FastAPI authentication dependencies for route protection."""

import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.auth.identity import Actor
from frontdesk.auth.jwt import decode_token
from frontdesk.database import get_db
from frontdesk.models.user import User

# Missing Authorization header is a hard stop, never a default identity.
_bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Extract and validate the Bearer token, then return the authenticated user.

    Raises:
        HTTPException 401: If the token is missing, invalid, expired, of the
            wrong type, or the user no longer exists.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise _unauthorized() from None

    # Only accept access tokens, not refresh tokens
    if payload.get("type") != "access":
        raise _unauthorized("Invalid token type")

    sub: str | None = payload.get("sub")
    if sub is None:
        raise _unauthorized()

    try:
        user_id = uuid.UUID(sub)
    except ValueError:
        raise _unauthorized() from None

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise _unauthorized()

    if not user.is_active:
        raise _unauthorized("User account is inactive")

    return user


async def get_current_active_user(
    user: User = Depends(get_current_user),
) -> User:
    """Return the current user only if their account is active.

    Raises:
        HTTPException 403: If the user account is inactive.
    """
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )
    return user


async def get_actor(user: User = Depends(get_current_active_user)) -> Actor:
    """Resolve the request's explicit identity for the service layer.

    The role comes from the database row rather than the token so that a
    demoted user loses manager rights immediately.
    """
    return Actor(user_id=user.id, role=user.role)


async def require_manager(actor: Actor = Depends(get_actor)) -> Actor:
    """Like ``get_actor`` but rejects non-managers with 403 up front."""
    actor.require_manager("perform this action")
    return actor
