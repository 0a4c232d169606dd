"""
Service layer - business logic and orchestration.

RULE: Routes call services. Services call repositories. Never the reverse.
"""
from app.services.admin_service import AdminService
from app.services.company_service import CompanyService
from app.services.notification_service import NotificationService
from app.services.slug_service import SlugService, slugify
from app.services.user_service import UserService

__all__ = [
    "AdminService",
    "CompanyService",
    "NotificationService",
    "SlugService",
    "slugify",
    "UserService",
]
