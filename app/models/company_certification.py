"""
CompanyCertification model - certifications a company holds.
"""
import uuid
from typing import TYPE_CHECKING
from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company import Company

CERTIFICATIONS = (
    "UL_508A",
    "ISO_9001",
    "ISO_14001",
    "OHSAS_18001",
    "IEC_61511",
    "ISA_84",
    "NFPA_70E",
    "OSHA_10",
    "OSHA_30",
    "SIL_CERTIFIED",
)


class CompanyCertification(BaseModel):
    __tablename__ = "company_certifications"

    __table_args__ = (
        UniqueConstraint("company_id", "certification", name="uq_company_certification"),
    )

    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    certification: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    company: Mapped["Company"] = relationship("Company", back_populates="certifications")

    def __repr__(self) -> str:
        return f"<CompanyCertification {self.certification} for company_id={self.company_id}>"
