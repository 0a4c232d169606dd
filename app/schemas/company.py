"""
Company schemas.

Submissions are deliberately permissive at the field level (blank strings
and empty lists are accepted) so that the per-step validator can report
every missing field grouped by wizard step in one response.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from app.schemas.base import BaseSchema, PaginatedResponse, TimestampSchema, IDSchema


def _dedupe(values: List[str]) -> List[str]:
    seen = set()
    out = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


# ── Requests ────────────────────────────────────────────────────────────────

class LocationServedIn(BaseSchema):
    """A served area. Leaving `state` empty means the whole country."""

    country: str = Field(default="US", min_length=2, max_length=2)
    state: Optional[str] = Field(default=None, max_length=10)
    region: Optional[str] = Field(default=None, max_length=100)

    @field_validator("country")
    @classmethod
    def _upper_country(cls, v: str) -> str:
        return v.strip().upper()

    @field_validator("state", "region")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("state")
    @classmethod
    def _upper_state(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v

    def key(self) -> tuple:
        return (self.country, self.state, self.region)

    def area(self) -> tuple:
        """Identity of the served area; `region` is only a label."""
        return (self.country, self.state)


class CompanySubmission(BaseSchema):
    """Body of POST /company - the full creation wizard payload."""

    # Step 1 - basic info
    name: str = ""
    description: str = ""
    website_url: str = ""
    logo_url: Optional[str] = None

    # Step 2 - company details
    phone: str = ""
    sales_email: str = ""
    hq_address: Optional[str] = None
    hq_city: str = ""
    hq_state: str = ""
    hq_zip: Optional[str] = None
    hq_country: str = "US"
    year_founded: Optional[int] = None
    size_bucket: Optional[str] = None

    # Step 3 - services
    services: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    locations_served: List[LocationServedIn] = Field(default_factory=list)

    @field_validator(
        "name", "description", "website_url", "phone", "sales_email", "hq_city", "hq_state",
        mode="before",
    )
    @classmethod
    def _strip(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("hq_state", "hq_country")
    @classmethod
    def _upper(cls, v: str) -> str:
        return v.upper()

    @field_validator("logo_url", "hq_address", "hq_zip", "size_bucket", mode="before")
    @classmethod
    def _optional_blank(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("services", "certifications")
    @classmethod
    def _unique_tags(cls, v: List[str]) -> List[str]:
        return _dedupe([item.strip().upper() for item in v])

    @field_validator("locations_served")
    @classmethod
    def _unique_locations(cls, v: List[LocationServedIn]) -> List[LocationServedIn]:
        seen = set()
        out = []
        for location in v:
            if location.area() not in seen:
                seen.add(location.area())
                out.append(location)
        return out


class CompanyUpdateRequest(CompanySubmission):
    """Body of POST /company/{id}."""

    regenerate_slug: bool = False


class LogoPresignRequest(BaseSchema):
    """Sent by the client to request a presigned logo upload."""

    filename: str = Field(..., min_length=1, max_length=255)
    content_type: str
    file_size_bytes: int = Field(..., gt=0)


# ── Responses ───────────────────────────────────────────────────────────────

class LocationServedResponse(BaseSchema):
    country: str
    state: Optional[str] = None
    region: Optional[str] = None


class CompanyResponse(IDSchema, TimestampSchema):
    """A listing with its child collections attached."""

    name: str
    slug: str
    description: Optional[str] = None
    website_url: Optional[str] = None
    logo_url: Optional[str] = None
    phone: Optional[str] = None
    sales_email: Optional[str] = None
    hq_address: Optional[str] = None
    hq_city: Optional[str] = None
    hq_state: Optional[str] = None
    hq_zip: Optional[str] = None
    hq_country: str = "US"
    year_founded: Optional[int] = None
    size_bucket: Optional[str] = None
    status: str
    services: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    locations_served: List[LocationServedResponse] = Field(default_factory=list)


class FilterOptions(BaseSchema):
    """Facet values available for the browse filters."""

    services: List[str] = Field(default_factory=list)
    locations: List[str] = Field(default_factory=list)
    sizes: List[str] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)


class CompanyPage(PaginatedResponse[CompanyResponse]):
    """GET /companies response: one page of approved listings plus facets."""

    facets: FilterOptions = Field(default_factory=FilterOptions)


class MyCompanyResponse(BaseSchema):
    """A company the caller is linked to, with their role."""

    relation: str
    company: CompanyResponse


class CompanyOwnerBrief(BaseSchema):
    user_id: UUID
    relation: str
    name: Optional[str] = None
    email: Optional[str] = None


class PendingCompanyResponse(CompanyResponse):
    """Admin review-queue entry."""

    owners: List[CompanyOwnerBrief] = Field(default_factory=list)


class LogoPresignResponse(BaseSchema):
    """
    The client must POST the file to `upload_url` with every entry of
    `fields` first and the `file` field last, then submit `logo_url`.
    """

    upload_url: str
    fields: Dict[str, Any]
    logo_url: str
    expires_at: datetime
