"""Core module exports."""
from app.core.config import settings, get_settings
from app.core.database import Base, get_db, init_db, close_db, engine, async_session_maker
from app.core.security import AuthIdentity, decode_token, identity_from_payload
from app.core.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    ValidationException,
    DependencyFailureException,
    InvalidTokenException,
    AdminRequiredException,
    CompanyAccessDeniedException,
    CompanyNotFoundException,
    ProfileNotFoundException,
    SlugResolutionException,
    SubmissionValidationException,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Database
    "Base",
    "get_db",
    "init_db",
    "close_db",
    "engine",
    "async_session_maker",
    # Security
    "AuthIdentity",
    "decode_token",
    "identity_from_payload",
    # Exceptions
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "ValidationException",
    "DependencyFailureException",
    "InvalidTokenException",
    "AdminRequiredException",
    "CompanyAccessDeniedException",
    "CompanyNotFoundException",
    "ProfileNotFoundException",
    "SlugResolutionException",
    "SubmissionValidationException",
]
