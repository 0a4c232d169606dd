"""
Database models for Control Compass.

All models use UUID primary keys and include created_at/updated_at timestamps.
"""
from app.models.base import BaseModel, TimestampMixin, UUIDMixin
from app.models.company import Company
from app.models.company_service_tag import CompanyServiceTag
from app.models.company_certification import CompanyCertification
from app.models.company_location_served import CompanyLocationServed
from app.models.user import User
from app.models.user_company import UserCompany

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "UUIDMixin",
    "Company",
    "CompanyServiceTag",
    "CompanyCertification",
    "CompanyLocationServed",
    "User",
    "UserCompany",
]
