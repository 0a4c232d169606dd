"""
Company service - business logic for browsing, creating and editing listings.

Routes stay thin: they parse the request, call one method here and return
the schema it builds. Every write path owns its transaction and either
commits once or rolls back everything.
"""
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import storage
from app.core.config import settings
from app.core.exceptions import (
    BadRequestException,
    CompanyAccessDeniedException,
    CompanyNotFoundException,
    SlugResolutionException,
)
from app.core.logging import get_logger
from app.core.security import AuthIdentity
from app.models.company import Company, COMPANY_STATUS_APPROVED, COMPANY_STATUS_PENDING
from app.models.user_company import EDITOR_RELATIONS, RELATION_OWNER
from app.repositories.company_filters import CompanyFilters
from app.repositories.company_repository import CompanyChildren, CompanyRepository
from app.repositories.user_repository import UserRepository
from app.schemas.company import (
    CompanyPage,
    CompanyResponse,
    CompanySubmission,
    CompanyUpdateRequest,
    FilterOptions,
    LocationServedResponse,
    LogoPresignRequest,
    LogoPresignResponse,
    MyCompanyResponse,
)
from app.services.notification_service import NotificationService
from app.services.pagination import paginate
from app.services.slug_service import SlugService, slugify
from app.services.submission_validator import validate_submission

logger = get_logger(__name__)

SLUG_CONSTRAINT = "uq_companies_slug"

# Insert attempts when a concurrent submission grabs the resolved slug first.
MAX_SLUG_CONFLICT_RETRIES = 3

_CONTENT_FIELDS = (
    "name",
    "description",
    "website_url",
    "logo_url",
    "phone",
    "sales_email",
    "hq_address",
    "hq_city",
    "hq_state",
    "hq_zip",
    "hq_country",
    "year_founded",
    "size_bucket",
)


def _content_values(data: CompanySubmission) -> dict:
    return {name: getattr(data, name) for name in _CONTENT_FIELDS}


def _location_rows(data: CompanySubmission) -> List[tuple]:
    return [loc.key() for loc in data.locations_served]


def _is_slug_conflict(exc: IntegrityError) -> bool:
    return SLUG_CONSTRAINT in str(exc.orig)


def to_response(company: Company, children: Optional[CompanyChildren] = None) -> CompanyResponse:
    """Attach child collections to a listing. Missing children become empty lists."""
    children = children or CompanyChildren()
    return CompanyResponse(
        id=company.id,
        name=company.name,
        slug=company.slug,
        description=company.description,
        website_url=company.website_url,
        logo_url=company.logo_url,
        phone=company.phone,
        sales_email=company.sales_email,
        hq_address=company.hq_address,
        hq_city=company.hq_city,
        hq_state=company.hq_state,
        hq_zip=company.hq_zip,
        hq_country=company.hq_country,
        year_founded=company.year_founded,
        size_bucket=company.size_bucket,
        status=company.status,
        created_at=company.created_at,
        updated_at=company.updated_at,
        services=list(children.services),
        certifications=list(children.certifications),
        locations_served=[
            LocationServedResponse(country=loc.country, state=loc.state, region=loc.region)
            for loc in children.locations_served
        ],
    )


class CompanyService:
    """Handles company browse, submission and owner edits."""

    def __init__(
        self,
        company_repo: Optional[CompanyRepository] = None,
        user_repo: Optional[UserRepository] = None,
        notifications: Optional[NotificationService] = None,
    ):
        self.company_repo = company_repo or CompanyRepository()
        self.user_repo = user_repo or UserRepository()
        self.slugs = SlugService(self.company_repo)
        self.notifications = notifications or NotificationService()

    # ── Aggregation ──────────────────────────────────────────────────────────

    async def to_responses(
        self,
        db: AsyncSession,
        companies: Sequence[Company],
    ) -> List[CompanyResponse]:
        """Batch-load children for a page of listings and build responses."""
        children: Dict[UUID, CompanyChildren] = await self.company_repo.load_children(
            db, [c.id for c in companies]
        )
        return [to_response(c, children.get(c.id)) for c in companies]

    # ── Public browse ────────────────────────────────────────────────────────

    async def search_companies(
        self,
        db: AsyncSession,
        filters: CompanyFilters,
        page: Optional[str] = None,
    ) -> CompanyPage:
        """
        One page of approved listings matching the filters, plus facets.

        A page past the end returns an empty item list with the real total.
        """
        total = await self.company_repo.count_approved(db, filters)
        window = paginate(total, page, settings.companies_page_size)

        companies: List[Company] = []
        if not window.is_past_end:
            companies = await self.company_repo.find_approved(
                db, filters, offset=window.offset, limit=window.page_size
            )

        items = await self.to_responses(db, companies)
        facets = await self.get_filter_options(db)

        return CompanyPage(
            items=items,
            total=window.total,
            page=window.page,
            limit=window.page_size,
            pages=window.total_pages,
            facets=facets,
        )

    async def get_filter_options(self, db: AsyncSession) -> FilterOptions:
        options = await self.company_repo.get_filter_options(db)
        return FilterOptions(**options)

    async def get_company_by_slug(self, db: AsyncSession, slug: str) -> CompanyResponse:
        """
        Raises:
            CompanyNotFoundException: Unknown slug or listing not approved.
        """
        company = await self.company_repo.get_by_slug(db, slug, status=COMPANY_STATUS_APPROVED)
        if not company:
            raise CompanyNotFoundException()
        children = await self.company_repo.load_children(db, [company.id])
        return to_response(company, children.get(company.id))

    # ── Submission ───────────────────────────────────────────────────────────

    async def create_company(
        self,
        db: AsyncSession,
        identity: AuthIdentity,
        data: CompanySubmission,
    ) -> CompanyResponse:
        """
        Create a PENDING listing owned by the caller.

        The listing, its children and the OWNER link are written in one
        transaction. When a concurrent submission wins the resolved slug the
        whole transaction is rolled back and retried with a fresh slug.

        Raises:
            SubmissionValidationException: Any wizard step is incomplete.
            SlugResolutionException: No free slug could be committed.
        """
        validate_submission(data)
        base_slug = slugify(data.name)

        company: Optional[Company] = None
        for attempt in range(1, MAX_SLUG_CONFLICT_RETRIES + 1):
            try:
                await self.user_repo.ensure_exists(db, identity.id, email=identity.email)
                slug = await self.slugs.resolve_unique(db, base_slug)
                company = await self.company_repo.create(
                    db,
                    slug=slug,
                    status=COMPANY_STATUS_PENDING,
                    **_content_values(data),
                )
                await self.company_repo.replace_children(
                    db,
                    company.id,
                    services=data.services,
                    certifications=data.certifications,
                    locations=_location_rows(data),
                )
                await self.company_repo.add_member(
                    db, user_id=identity.id, company_id=company.id, relation=RELATION_OWNER
                )
                await db.commit()
                break
            except IntegrityError as exc:
                await db.rollback()
                if not _is_slug_conflict(exc):
                    raise
                logger.warning("company_slug_conflict", base_slug=base_slug, attempt=attempt)
                company = None
            except Exception:
                await db.rollback()
                raise

        if company is None:
            raise SlugResolutionException(base_slug)

        logger.info(
            "company_created",
            company_id=str(company.id),
            slug=company.slug,
            user_id=str(identity.id),
        )

        await self.notifications.notify_new_company(
            company_id=company.id,
            company_name=company.name,
            submitted_by=identity.email,
        )

        children = await self.company_repo.load_children(db, [company.id])
        return to_response(company, children.get(company.id))

    # ── Owner edits ──────────────────────────────────────────────────────────

    async def update_company(
        self,
        db: AsyncSession,
        identity: AuthIdentity,
        company_id: UUID,
        data: CompanyUpdateRequest,
    ) -> CompanyResponse:
        """
        Replace a listing's content and child collections.

        Status is never touched here. The slug is kept unless
        `regenerate_slug` is set.

        Raises:
            CompanyNotFoundException: Unknown company id.
            CompanyAccessDeniedException: Caller is not an owner or member.
            SubmissionValidationException: Any wizard step is incomplete.
        """
        company = await self.company_repo.get_by_id(db, company_id)
        if not company:
            raise CompanyNotFoundException()

        relation = await self.company_repo.get_relation(db, identity.id, company_id)
        if relation not in EDITOR_RELATIONS:
            raise CompanyAccessDeniedException()

        validate_submission(data)

        try:
            updates = _content_values(data)
            if data.regenerate_slug:
                updates["slug"] = await self.slugs.resolve_unique(
                    db, slugify(data.name), exclude_id=company.id
                )
            company = await self.company_repo.update(db, company, **updates)
            await self.company_repo.replace_children(
                db,
                company.id,
                services=data.services,
                certifications=data.certifications,
                locations=_location_rows(data),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            logger.warning("company_update_rolled_back", company_id=str(company_id))
            raise

        logger.info("company_updated", company_id=str(company.id), user_id=str(identity.id))

        children = await self.company_repo.load_children(db, [company.id])
        return to_response(company, children.get(company.id))

    async def list_user_companies(
        self,
        db: AsyncSession,
        identity: AuthIdentity,
    ) -> List[MyCompanyResponse]:
        """Every listing linked to the caller, whatever its status."""
        linked = await self.company_repo.list_for_user(db, identity.id)
        responses = await self.to_responses(db, [company for company, _ in linked])
        return [
            MyCompanyResponse(relation=relation, company=response)
            for (_, relation), response in zip(linked, responses)
        ]

    # ── Logo upload ──────────────────────────────────────────────────────────

    async def presign_logo(
        self,
        identity: AuthIdentity,
        req: LogoPresignRequest,
    ) -> LogoPresignResponse:
        """
        Presigned POST for a direct browser-to-bucket logo upload.

        Raises:
            BadRequestException: Unsupported image type or file too large.
        """
        if req.content_type not in storage.ALLOWED_LOGO_TYPES:
            allowed = ", ".join(sorted(storage.ALLOWED_LOGO_TYPES))
            raise BadRequestException(
                f"Unsupported logo type '{req.content_type}'. Allowed: {allowed}",
                code="UNSUPPORTED_LOGO_TYPE",
            )
        if req.file_size_bytes > settings.max_logo_size_bytes:
            raise BadRequestException(
                f"Logo exceeds the {settings.max_logo_size_mb} MB limit",
                code="LOGO_TOO_LARGE",
            )

        key = storage.build_logo_key(str(identity.id), req.filename, req.content_type)
        presign = await storage.generate_presign_upload(
            key, req.content_type, settings.max_logo_size_bytes
        )
        expires_at = datetime.now(timezone.utc) + timedelta(
            seconds=settings.s3_presign_upload_expires
        )

        return LogoPresignResponse(
            upload_url=presign["url"],
            fields=presign["fields"],
            logo_url=storage.public_url_for(key),
            expires_at=expires_at,
        )
