"""
Rate limiting configuration using slowapi.

Uses Redis as the backend so limits are shared across workers.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from app.core.config import settings


def _get_user_or_ip(request: Request) -> str:
    """
    Rate-limit key: authenticated subject if available, otherwise client IP.

    The auth dependency stores the verified identity on request.state.
    """
    identity = getattr(request.state, "identity", None)
    if identity is not None and getattr(identity, "id", None):
        return str(identity.id)
    return get_remote_address(request)


limiter = Limiter(
    key_func=_get_user_or_ip,
    storage_uri=settings.redis_url,
    strategy="fixed-window",
)

# Pre-defined rate limit strings for use in route decorators:
#   @limiter.limit(RATE_SUBMIT)
RATE_SUBMIT = "10/hour"          # company creation - each one emails the admins
RATE_LOGO_UPLOAD = "20/hour"     # presign - S3 quota
RATE_PROFILE = "30/minute"
