"""
Custom exceptions for the application.
All API exceptions should inherit from APIException for consistent error handling.
"""
from typing import Optional, Any


class APIException(Exception):
    """
    Base exception for all API errors.
    Provides consistent error response format.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: Optional[Any] = None,
    ):
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(self.message)


class BadRequestException(APIException):
    """400 Bad Request"""

    def __init__(self, message: str = "Bad request", code: str = "BAD_REQUEST"):
        super().__init__(400, code, message)


class UnauthorizedException(APIException):
    """401 Unauthorized"""

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, code, message)


class ForbiddenException(APIException):
    """403 Forbidden"""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, code, message)


class NotFoundException(APIException):
    """404 Not Found"""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, code, message)


class ConflictException(APIException):
    """409 Conflict"""

    def __init__(self, message: str = "Resource conflict", code: str = "CONFLICT"):
        super().__init__(409, code, message)


class ValidationException(APIException):
    """422 Validation Error"""

    def __init__(
        self,
        message: str = "Validation error",
        code: str = "VALIDATION_ERROR",
        details: Optional[Any] = None,
    ):
        super().__init__(422, code, message, details)


class DependencyFailureException(APIException):
    """502 Bad Gateway - an outbound dependency (email, storage) failed."""

    def __init__(
        self,
        message: str = "Upstream dependency failed",
        code: str = "DEPENDENCY_FAILURE",
    ):
        super().__init__(502, code, message)


# Authentication specific exceptions
class InvalidTokenException(UnauthorizedException):
    """Token is invalid or expired"""

    def __init__(self):
        super().__init__(
            message="Invalid token",
            code="INVALID_TOKEN",
        )


class AdminRequiredException(ForbiddenException):
    """Caller is authenticated but not an admin"""

    def __init__(self):
        super().__init__(message="Admin access required", code="ADMIN_REQUIRED")


class CompanyAccessDeniedException(ForbiddenException):
    """Caller has no owner/member link to the company"""

    def __init__(self):
        super().__init__(
            message="You don't have permission to edit this company",
            code="COMPANY_ACCESS_DENIED",
        )


# Resource specific exceptions
class CompanyNotFoundException(NotFoundException):
    """Company not found"""

    def __init__(self):
        super().__init__(message="Company not found", code="COMPANY_NOT_FOUND")


class ProfileNotFoundException(NotFoundException):
    """Actor profile not found"""

    def __init__(self):
        super().__init__(message="Profile not found", code="PROFILE_NOT_FOUND")


class SlugResolutionException(ConflictException):
    """No free slug could be found within the attempt bound"""

    def __init__(self, base_slug: str):
        super().__init__(
            message=f"Could not find an unused slug for '{base_slug}'",
            code="SLUG_RESOLUTION_FAILED",
        )
        self.base_slug = base_slug


class SubmissionValidationException(ValidationException):
    """Company submission failed one or more form steps"""

    def __init__(self, step_errors: dict[str, dict[str, str]]):
        super().__init__(
            message="Company submission is incomplete",
            code="VALIDATION_ERROR",
            details={"steps": step_errors},
        )
        self.step_errors = step_errors
