"""
Company repository - data access for Company and its child collections.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import select, func, delete, distinct
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import Company, COMPANY_STATUS_APPROVED, SIZE_BUCKETS
from app.models.company_certification import CompanyCertification
from app.models.company_location_served import CompanyLocationServed
from app.models.company_service_tag import CompanyServiceTag
from app.models.user import User
from app.models.user_company import UserCompany
from app.repositories.base import BaseRepository
from app.repositories.company_filters import CompanyFilters, build_company_filters


@dataclass
class CompanyChildren:
    """Child collections of one company. Always lists, never None."""

    services: List[str] = field(default_factory=list)
    certifications: List[str] = field(default_factory=list)
    locations_served: List[CompanyLocationServed] = field(default_factory=list)


class CompanyRepository(BaseRepository[Company]):
    def __init__(self):
        super().__init__(Company)

    # ── Lookups ─────────────────────────────────────────────────────────────

    async def get_by_slug(
        self,
        db: AsyncSession,
        slug: str,
        *,
        status: Optional[str] = None,
    ) -> Optional[Company]:
        """Find a company by its URL slug, optionally restricted to one status."""
        query = select(Company).where(Company.slug == slug)
        if status is not None:
            query = query.where(Company.status == status)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def slug_exists(
        self,
        db: AsyncSession,
        slug: str,
        *,
        exclude_id: Optional[UUID] = None,
    ) -> bool:
        """Check if a company slug is taken (optionally ignoring one company)."""
        query = select(Company.id).where(Company.slug == slug)
        if exclude_id is not None:
            query = query.where(Company.id != exclude_id)
        result = await db.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def find_by_status(
        self,
        db: AsyncSession,
        status: str,
    ) -> List[Company]:
        """All companies in one status, newest first (admin review queue)."""
        result = await db.execute(
            select(Company)
            .where(Company.status == status)
            .order_by(Company.created_at.desc(), Company.seq.desc())
        )
        return list(result.scalars().all())

    # ── Browse ──────────────────────────────────────────────────────────────

    async def count_approved(
        self,
        db: AsyncSession,
        filters: CompanyFilters,
    ) -> int:
        """Number of approved companies matching the filters."""
        query = select(func.count(Company.id)).where(*build_company_filters(filters))
        result = await db.execute(query)
        return result.scalar() or 0

    async def find_approved(
        self,
        db: AsyncSession,
        filters: CompanyFilters,
        *,
        offset: int,
        limit: int,
    ) -> List[Company]:
        """
        One window of approved companies matching the filters.

        Oldest submissions first. Equal timestamps keep insertion order,
        so repeated queries page identically.
        """
        query = (
            select(Company)
            .where(*build_company_filters(filters))
            .order_by(Company.created_at.asc(), Company.seq.asc())
            .offset(offset)
            .limit(limit)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def load_children(
        self,
        db: AsyncSession,
        company_ids: Sequence[UUID],
    ) -> Dict[UUID, CompanyChildren]:
        """
        Fetch services, certifications and served areas for a batch of companies.

        Three queries per batch regardless of batch size. Every requested id
        is present in the result, with empty lists when it has no children.
        """
        children: Dict[UUID, CompanyChildren] = {cid: CompanyChildren() for cid in company_ids}
        if not company_ids:
            return children

        services = await db.execute(
            select(CompanyServiceTag.company_id, CompanyServiceTag.service)
            .where(CompanyServiceTag.company_id.in_(company_ids))
            .order_by(CompanyServiceTag.service)
        )
        for company_id, service in services.all():
            children[company_id].services.append(service)

        certifications = await db.execute(
            select(CompanyCertification.company_id, CompanyCertification.certification)
            .where(CompanyCertification.company_id.in_(company_ids))
            .order_by(CompanyCertification.certification)
        )
        for company_id, certification in certifications.all():
            children[company_id].certifications.append(certification)

        locations = await db.execute(
            select(CompanyLocationServed)
            .where(CompanyLocationServed.company_id.in_(company_ids))
            .order_by(CompanyLocationServed.country, CompanyLocationServed.state.nulls_first())
        )
        for location in locations.scalars().all():
            children[location.company_id].locations_served.append(location)

        return children

    async def get_filter_options(
        self,
        db: AsyncSession,
    ) -> Dict[str, List[str]]:
        """Distinct facet values across approved companies."""
        approved = Company.status == COMPANY_STATUS_APPROVED

        services = await db.execute(
            select(distinct(CompanyServiceTag.service))
            .join(Company, Company.id == CompanyServiceTag.company_id)
            .where(approved)
            .order_by(CompanyServiceTag.service)
        )
        locations = await db.execute(
            select(distinct(Company.hq_state))
            .where(approved, Company.hq_state.isnot(None))
            .order_by(Company.hq_state)
        )
        sizes = await db.execute(
            select(distinct(Company.size_bucket))
            .where(approved, Company.size_bucket.isnot(None))
        )
        certifications = await db.execute(
            select(distinct(CompanyCertification.certification))
            .join(Company, Company.id == CompanyCertification.company_id)
            .where(approved)
            .order_by(CompanyCertification.certification)
        )

        size_order = {bucket: i for i, bucket in enumerate(SIZE_BUCKETS)}
        return {
            "services": list(services.scalars().all()),
            "locations": list(locations.scalars().all()),
            "sizes": sorted(sizes.scalars().all(), key=lambda s: size_order.get(s, len(size_order))),
            "certifications": list(certifications.scalars().all()),
        }

    # ── Writes ──────────────────────────────────────────────────────────────

    async def replace_children(
        self,
        db: AsyncSession,
        company_id: UUID,
        *,
        services: Iterable[str],
        certifications: Iterable[str],
        locations: Iterable[Tuple[str, Optional[str], Optional[str]]],
    ) -> None:
        """
        Delete every child row of the company and insert the given sets.

        Runs inside the caller's transaction; the caller commits or rolls back.
        """
        await db.execute(delete(CompanyServiceTag).where(CompanyServiceTag.company_id == company_id))
        await db.execute(delete(CompanyCertification).where(CompanyCertification.company_id == company_id))
        await db.execute(delete(CompanyLocationServed).where(CompanyLocationServed.company_id == company_id))

        db.add_all([CompanyServiceTag(company_id=company_id, service=s) for s in services])
        db.add_all([
            CompanyCertification(company_id=company_id, certification=c)
            for c in certifications
        ])
        db.add_all([
            CompanyLocationServed(company_id=company_id, country=country, state=state, region=region)
            for country, state, region in locations
        ])
        await db.flush()

    # ── Membership ──────────────────────────────────────────────────────────

    async def add_member(
        self,
        db: AsyncSession,
        *,
        user_id: UUID,
        company_id: UUID,
        relation: str,
    ) -> UserCompany:
        link = UserCompany(user_id=user_id, company_id=company_id, relation=relation)
        db.add(link)
        await db.flush()
        return link

    async def get_relation(
        self,
        db: AsyncSession,
        user_id: UUID,
        company_id: UUID,
    ) -> Optional[str]:
        """The caller's role on a company, or None if unlinked."""
        result = await db.execute(
            select(UserCompany.relation).where(
                UserCompany.user_id == user_id,
                UserCompany.company_id == company_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> List[Tuple[Company, str]]:
        """Companies linked to a user (any status), most recent link first."""
        result = await db.execute(
            select(Company, UserCompany.relation)
            .join(UserCompany, UserCompany.company_id == Company.id)
            .where(UserCompany.user_id == user_id)
            .order_by(UserCompany.created_at.desc())
        )
        return [(company, relation) for company, relation in result.all()]

    async def get_members(
        self,
        db: AsyncSession,
        company_ids: Sequence[UUID],
        *,
        relation: Optional[str] = None,
    ) -> Dict[UUID, List[Tuple[UserCompany, User]]]:
        """Linked users for a batch of companies, keyed by company id."""
        members: Dict[UUID, List[Tuple[UserCompany, User]]] = {cid: [] for cid in company_ids}
        if not company_ids:
            return members

        query = (
            select(UserCompany, User)
            .join(User, User.id == UserCompany.user_id)
            .where(UserCompany.company_id.in_(company_ids))
        )
        if relation is not None:
            query = query.where(UserCompany.relation == relation)

        result = await db.execute(query)
        for link, user in result.all():
            members[link.company_id].append((link, user))
        return members
