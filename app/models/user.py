"""
User model - the actor profile behind an identity-provider account.
"""
from typing import TYPE_CHECKING, Optional, List
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.user_company import UserCompany

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


class User(BaseModel):
    """
    Actor profile.

    The primary key is the identity provider's subject id, so a verified
    token maps to exactly one profile row. `role` is only consulted to
    gate the approval workflow.
    """

    __tablename__ = "users"

    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_USER)

    companies: Mapped[List["UserCompany"]] = relationship(
        "UserCompany",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
