"""
CompanyServiceTag model - the services a company offers.
"""
import uuid
from typing import TYPE_CHECKING
from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company import Company

SERVICE_TYPES = (
    "CONTROL_PANEL_ASSEMBLY",
    "SYSTEM_INTEGRATION",
    "CALIBRATION_SERVICES",
)


class CompanyServiceTag(BaseModel):
    """One offered service; a company's services form a set."""

    __tablename__ = "company_services"

    __table_args__ = (
        UniqueConstraint("company_id", "service", name="uq_company_service"),
    )

    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    company: Mapped["Company"] = relationship("Company", back_populates="services")

    def __repr__(self) -> str:
        return f"<CompanyServiceTag {self.service} for company_id={self.company_id}>"
