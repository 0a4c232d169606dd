"""
Security utilities for authentication.

Sign-up, login and token issuance live with the external identity provider.
This API only verifies the provider's signed access tokens.
"""
from dataclasses import dataclass
from typing import Optional, Any
from uuid import UUID

from jose import JWTError, jwt

from app.core.config import settings


@dataclass(frozen=True)
class AuthIdentity:
    """The verified caller, as asserted by the identity provider."""

    id: UUID
    email: Optional[str] = None


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode and validate an identity-provider JWT.

    Args:
        token: JWT token string

    Returns:
        Decoded payload or None if invalid
    """
    options = {"verify_aud": settings.auth_jwt_audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            options=options,
        )
        return payload
    except JWTError:
        return None


def identity_from_payload(payload: dict[str, Any]) -> Optional[AuthIdentity]:
    """Build an AuthIdentity from a decoded token, or None if `sub` is unusable."""
    subject = payload.get("sub")
    if not subject:
        return None
    try:
        user_id = UUID(str(subject))
    except ValueError:
        return None
    return AuthIdentity(id=user_id, email=payload.get("email"))
