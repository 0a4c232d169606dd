"""
Repository layer - data access abstraction.

Repositories handle all database queries, keeping SQL/ORM logic
out of the service and route layers.
"""
from app.repositories.base import BaseRepository
from app.repositories.company_filters import CompanyFilters, build_company_filters
from app.repositories.company_repository import CompanyChildren, CompanyRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CompanyFilters",
    "build_company_filters",
    "CompanyChildren",
    "CompanyRepository",
    "UserRepository",
]
