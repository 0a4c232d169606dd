"""
Company model - a listing in the directory.

Status lifecycle:
  PENDING → APPROVED
         ↘ REJECTED
Admins may also move a listing between APPROVED and REJECTED.
Only APPROVED companies are ever visible to the public browse/detail endpoints.
"""
from typing import TYPE_CHECKING, List, Optional
from sqlalchemy import BigInteger, Identity, String, Integer, Text, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import BaseModel

if TYPE_CHECKING:
    from app.models.company_service_tag import CompanyServiceTag
    from app.models.company_certification import CompanyCertification
    from app.models.company_location_served import CompanyLocationServed
    from app.models.user_company import UserCompany

# Valid status values (referenced by the directory, admin and company services)
COMPANY_STATUS_PENDING = "PENDING"
COMPANY_STATUS_APPROVED = "APPROVED"
COMPANY_STATUS_REJECTED = "REJECTED"

# Employee-count ranges, smallest first
SIZE_BUCKETS = (
    "SIZE_1_10",
    "SIZE_11_50",
    "SIZE_51_200",
    "SIZE_201_500",
    "SIZE_501_PLUS",
)

DEFAULT_COUNTRY = "US"


class Company(BaseModel):
    """
    Company listing entity.

    Owns three child collections (services, certifications, served areas)
    that are replaced wholesale on every update.
    """

    __tablename__ = "companies"

    __table_args__ = (
        # Authoritative slug guard; the service-side resolver is only a pre-check.
        UniqueConstraint("slug", name="uq_companies_slug"),
        UniqueConstraint("seq", name="uq_companies_seq"),
        Index("ix_companies_status_created", "status", "created_at"),
    )

    # Identity
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(220), nullable=False)
    # Insertion order; breaks created_at ties in browse.
    seq: Mapped[int] = mapped_column(BigInteger, Identity(), nullable=False)

    # Descriptive
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    sales_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Headquarters
    hq_address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hq_city: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    hq_state: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, index=True)
    hq_zip: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    hq_country: Mapped[str] = mapped_column(String(2), nullable=False, default=DEFAULT_COUNTRY)

    # Classification
    year_founded: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    size_bucket: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Lifecycle
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=COMPANY_STATUS_PENDING,
        index=True,
    )

    # Relationships
    services: Mapped[List["CompanyServiceTag"]] = relationship(
        "CompanyServiceTag",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    certifications: Mapped[List["CompanyCertification"]] = relationship(
        "CompanyCertification",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    locations_served: Mapped[List["CompanyLocationServed"]] = relationship(
        "CompanyLocationServed",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    members: Mapped[List["UserCompany"]] = relationship(
        "UserCompany",
        back_populates="company",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Company {self.slug} ({self.status})>"
