"""
API dependencies for dependency injection.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import AuthIdentity, decode_token, identity_from_payload
from app.core.exceptions import (
    UnauthorizedException,
    InvalidTokenException,
    AdminRequiredException,
)
from app.models.user import ROLE_ADMIN
from app.repositories.user_repository import UserRepository


# Security scheme
security = HTTPBearer(auto_error=False)

user_repo = UserRepository()


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthIdentity:
    """
    Get the verified caller from the bearer token.

    No database access: a caller without a profile row is still
    authenticated.

    Raises:
        UnauthorizedException: If no token provided
        InvalidTokenException: If token is invalid or expired
    """
    if not credentials:
        raise UnauthorizedException("Authentication required")

    payload = decode_token(credentials.credentials)
    if not payload:
        raise InvalidTokenException()

    identity = identity_from_payload(payload)
    if identity is None:
        raise InvalidTokenException()

    # Read by the rate limiter key function.
    request.state.identity = identity
    return identity


async def get_admin_identity(
    identity: AuthIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> AuthIdentity:
    """
    Get the caller, ensuring their profile has the ADMIN role.

    The role is looked up by the token subject only.

    Raises:
        AdminRequiredException: No profile, or a non-admin role
    """
    role = await user_repo.get_role(db, identity.id)
    if role != ROLE_ADMIN:
        raise AdminRequiredException()
    return identity
