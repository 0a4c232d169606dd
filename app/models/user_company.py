"""
UserCompany model - links an actor to a company with a role.
"""
import uuid
from typing import TYPE_CHECKING
from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company import Company
    from app.models.user import User

RELATION_OWNER = "OWNER"
RELATION_MEMBER = "MEMBER"
EDITOR_RELATIONS = (RELATION_OWNER, RELATION_MEMBER)


class UserCompany(BaseModel):
    """
    Ownership link.

    Every company gets an OWNER link to its submitter on creation.
    OWNER and MEMBER may edit content; neither may change status.
    """

    __tablename__ = "user_companies"

    __table_args__ = (
        UniqueConstraint("user_id", "company_id", name="uq_user_company"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    relation: Mapped[str] = mapped_column(String(20), nullable=False, default=RELATION_OWNER)

    user: Mapped["User"] = relationship("User", back_populates="companies")
    company: Mapped["Company"] = relationship("Company", back_populates="members")

    def __repr__(self) -> str:
        return f"<UserCompany {self.relation} user_id={self.user_id} company_id={self.company_id}>"
