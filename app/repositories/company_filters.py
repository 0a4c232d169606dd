"""
Browse filters for approved companies.

Turns the optional query-string parameters of GET /companies into a list of
SQLAlchemy predicates. All dimensions are ANDed; multi-select dimensions
(certifications, areas served) are ORed within themselves.

Malformed values never raise: an unknown size, service, certification or
state code compiles to false() so the query simply matches nothing. Search
text is matched literally; % and _ are not wildcards.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sqlalchemy import and_, false, or_

from app.models.company import Company, COMPANY_STATUS_APPROVED, SIZE_BUCKETS
from app.models.company_certification import CompanyCertification, CERTIFICATIONS
from app.models.company_location_served import (
    CompanyLocationServed,
    US_STATE_CODES,
    WILDCARD_COUNTRY,
)
from app.models.company_service_tag import CompanyServiceTag, SERVICE_TYPES


def split_csv(raw: Optional[str]) -> List[str]:
    """'ISO_9001, UL_508A,,' -> ['ISO_9001', 'UL_508A'] (order kept, dupes dropped)."""
    if not raw:
        return []
    values = []
    for part in raw.split(","):
        part = part.strip()
        if part and part not in values:
            values.append(part)
    return values


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class CompanyFilters:
    """Normalized browse parameters. Build with from_query()."""

    search: Optional[str] = None
    service: Optional[str] = None
    location: Optional[str] = None
    size: Optional[str] = None
    certifications: List[str] = field(default_factory=list)
    areas_served: List[str] = field(default_factory=list)

    @classmethod
    def from_query(
        cls,
        *,
        search: Optional[str] = None,
        service: Optional[str] = None,
        location: Optional[str] = None,
        size: Optional[str] = None,
        certifications: Optional[str] = None,
        areas_served: Optional[str] = None,
    ) -> "CompanyFilters":
        location = _clean(location)
        return cls(
            search=_clean(search),
            service=_clean(service),
            location=location.upper() if location else None,
            size=_clean(size),
            certifications=split_csv(certifications),
            areas_served=[code.upper() for code in split_csv(areas_served)],
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.search
            or self.service
            or self.location
            or self.size
            or self.certifications
            or self.areas_served
        )


def build_company_filters(filters: CompanyFilters) -> List[Any]:
    """
    Compile browse filters into WHERE predicates on Company.

    The APPROVED status predicate is always first and always present.
    """
    predicates: List[Any] = [Company.status == COMPANY_STATUS_APPROVED]

    if filters.search:
        predicates.append(
            or_(
                Company.name.icontains(filters.search, autoescape=True),
                Company.description.icontains(filters.search, autoescape=True),
            )
        )

    if filters.service:
        if filters.service in SERVICE_TYPES:
            predicates.append(
                Company.services.any(CompanyServiceTag.service == filters.service)
            )
        else:
            predicates.append(false())

    if filters.location:
        predicates.append(Company.hq_state == filters.location)

    if filters.size:
        if filters.size in SIZE_BUCKETS:
            predicates.append(Company.size_bucket == filters.size)
        else:
            predicates.append(false())

    if filters.certifications:
        known = [c for c in filters.certifications if c in CERTIFICATIONS]
        if known:
            predicates.append(
                Company.certifications.any(CompanyCertification.certification.in_(known))
            )
        else:
            predicates.append(false())

    if filters.areas_served:
        states = [s for s in filters.areas_served if s in US_STATE_CODES]
        if states:
            # A whole-country row satisfies any state in that country.
            predicates.append(
                Company.locations_served.any(
                    or_(
                        CompanyLocationServed.state.in_(states),
                        and_(
                            CompanyLocationServed.country == WILDCARD_COUNTRY,
                            CompanyLocationServed.state.is_(None),
                        ),
                    )
                )
            )
        else:
            predicates.append(false())

    return predicates
