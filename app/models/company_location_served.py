"""
CompanyLocationServed model - geographic areas a company serves.

A row with country set and state NULL is a whole-country wildcard:
the company serves every state in that country. A company serves each
(country, state) pair at most once.
"""
import uuid
from typing import TYPE_CHECKING, Optional
from sqlalchemy import String, ForeignKey, Index, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company import Company

WILDCARD_COUNTRY = "US"

US_STATE_CODES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
})


class CompanyLocationServed(BaseModel):
    __tablename__ = "company_locations_served"

    __table_args__ = (
        Index("ix_company_locations_country_state", "country", "state"),
    )

    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    country: Mapped[str] = mapped_column(String(2), nullable=False)
    state: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    company: Mapped["Company"] = relationship("Company", back_populates="locations_served")

    def __repr__(self) -> str:
        return f"<CompanyLocationServed {self.country}/{self.state or '*'}>"


# NULL states compare equal here, so one whole-country row per country.
Index(
    "uq_company_locations_area",
    CompanyLocationServed.company_id,
    CompanyLocationServed.country,
    func.coalesce(CompanyLocationServed.state, ""),
    unique=True,
)
