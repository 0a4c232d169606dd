"""
Pydantic schemas for API validation and serialization.
"""
from app.schemas.base import (
    BaseSchema,
    PaginatedResponse,
    ErrorResponse,
)
from app.schemas.company import (
    LocationServedIn,
    CompanySubmission,
    CompanyUpdateRequest,
    LogoPresignRequest,
    LocationServedResponse,
    CompanyResponse,
    FilterOptions,
    CompanyPage,
    MyCompanyResponse,
    CompanyOwnerBrief,
    PendingCompanyResponse,
    LogoPresignResponse,
)
from app.schemas.admin import (
    CompanyStatusRequest,
    CompanyStatusBrief,
    CompanyStatusResponse,
)
from app.schemas.user import (
    ProfileUpdateRequest,
    ProfileResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "PaginatedResponse",
    "ErrorResponse",
    # Company
    "LocationServedIn",
    "CompanySubmission",
    "CompanyUpdateRequest",
    "LogoPresignRequest",
    "LocationServedResponse",
    "CompanyResponse",
    "FilterOptions",
    "CompanyPage",
    "MyCompanyResponse",
    "CompanyOwnerBrief",
    "PendingCompanyResponse",
    "LogoPresignResponse",
    # Admin
    "CompanyStatusRequest",
    "CompanyStatusBrief",
    "CompanyStatusResponse",
    # Profile
    "ProfileUpdateRequest",
    "ProfileResponse",
]
