"""Browse, ordering and approval against a real database engine.

Runs on in-memory SQLite through aiosqlite. SQLite has no identity
columns, so `companies.seq` is assigned on insert the way PostgreSQL would.
"""

import itertools
from datetime import datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers every table on Base.metadata
from app.core.database import Base
from app.models.company import Company, COMPANY_STATUS_APPROVED, COMPANY_STATUS_PENDING
from app.models.company_location_served import CompanyLocationServed
from app.repositories.company_filters import CompanyFilters
from app.repositories.company_repository import CompanyRepository
from app.services.admin_service import AdminService
from app.services.company_service import CompanyService

CREATED_AT = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def identity_seq():
    counter = itertools.count(1)

    def _assign(mapper, connection, target):
        if target.seq is None:
            target.seq = next(counter)

    event.listen(Company, "before_insert", _assign)
    yield
    event.remove(Company, "before_insert", _assign)


@pytest_asyncio.fixture
async def db(identity_seq):
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(engine, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def repo() -> CompanyRepository:
    return CompanyRepository()


@pytest.fixture
def add_company(db, repo):
    async def _add(name, *, status=COMPANY_STATUS_APPROVED, locations=(), description=None, created_at=None):
        company = await repo.create(
            db,
            name=name,
            slug=f"{name.lower().replace(' ', '-')}-{uuid4().hex[:6]}",
            description=description,
            status=status,
            created_at=created_at or CREATED_AT,
            updated_at=created_at or CREATED_AT,
        )
        await repo.replace_children(
            db, company.id, services=[], certifications=[], locations=list(locations)
        )
        await db.commit()
        return company

    return _add


async def browse(db, repo, **query):
    companies = await repo.find_approved(db, CompanyFilters.from_query(**query), offset=0, limit=30)
    return [c.name for c in companies]


class TestBrowseOrdering:

    @pytest.mark.asyncio
    async def test_equal_timestamps_keep_insertion_order(self, db, repo, add_company):
        await add_company("first")
        await add_company("second")
        await add_company("third")

        assert await browse(db, repo) == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_older_listings_come_first(self, db, repo, add_company):
        await add_company("newer", created_at=datetime(2025, 6, 1, tzinfo=timezone.utc))
        await add_company("older", created_at=datetime(2024, 6, 1, tzinfo=timezone.utc))

        assert await browse(db, repo) == ["older", "newer"]


class TestAreasServed:

    @pytest.mark.asyncio
    async def test_state_matches_explicit_and_whole_country(self, db, repo, add_company):
        await add_company("Explicit CA", locations=[("US", "CA", None)])
        await add_company("Nationwide", locations=[("US", None, None)])
        await add_company("Texas", locations=[("US", "TX", None)])

        assert await browse(db, repo, areas_served="CA") == ["Explicit CA", "Nationwide"]
        assert await browse(db, repo, areas_served="ca,tx") == ["Explicit CA", "Nationwide", "Texas"]

    @pytest.mark.asyncio
    async def test_unknown_state_code_matches_nothing(self, db, repo, add_company):
        await add_company("Explicit CA", locations=[("US", "CA", None)])
        await add_company("Nationwide", locations=[("US", None, None)])

        assert await browse(db, repo, areas_served="NOT_A_STATE") == []
        assert await browse(db, repo, areas_served="ZZ,CA") == ["Explicit CA", "Nationwide"]

    @pytest.mark.asyncio
    async def test_same_area_cannot_be_stored_twice(self, db, add_company):
        company = await add_company("Explicit CA", locations=[("US", "CA", "Bay Area")])
        db.add(CompanyLocationServed(company_id=company.id, country="US", state="CA", region="Central Valley"))

        with pytest.raises(IntegrityError):
            await db.flush()

    @pytest.mark.asyncio
    async def test_one_whole_country_row_per_country(self, db, add_company):
        company = await add_company("Nationwide", locations=[("US", None, None)])
        db.add(CompanyLocationServed(company_id=company.id, country="US", state=None, region=None))

        with pytest.raises(IntegrityError):
            await db.flush()


class TestSearch:

    @pytest.mark.asyncio
    async def test_case_insensitive_substring(self, db, repo, add_company):
        await add_company("Acme PANELS")
        await add_company("Bolt Works", description="Custom panel builds")
        await add_company("Gulf Calibration")

        assert await browse(db, repo, search="panel") == ["Acme PANELS", "Bolt Works"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["_", "%", "e_p"])
    async def test_like_wildcards_are_literal(self, db, repo, add_company, text):
        await add_company("Acme Panels")
        await add_company("Bolt Works")

        assert await browse(db, repo, search=text) == []

    @pytest.mark.asyncio
    async def test_literal_underscore_still_matches(self, db, repo, add_company):
        await add_company("ACME_AUTOMATION")
        await add_company("Acme Automation")

        assert await browse(db, repo, search="e_a") == ["ACME_AUTOMATION"]


class TestApprovalVisibility:

    @pytest.mark.asyncio
    async def test_pending_listing_appears_once_after_approval(self, db, add_company):
        await add_company("Already Live")
        pending = await add_company("Awaiting Review", status=COMPANY_STATUS_PENDING, locations=[("US", "TX", None)])
        companies = CompanyService(notifications=AsyncMock())
        admin = AdminService(notifications=AsyncMock())

        before = await companies.search_companies(db, CompanyFilters())
        assert [item.name for item in before.items] == ["Already Live"]
        assert before.total == 1

        result = await admin.approve(db, uuid4(), pending.id)
        assert result.changed is True

        after = await companies.search_companies(db, CompanyFilters())
        assert [item.name for item in after.items] == ["Already Live", "Awaiting Review"]
        assert after.total == 2
        assert after.items[1].locations_served[0].state == "TX"

    @pytest.mark.asyncio
    async def test_approving_twice_does_not_duplicate(self, db, add_company):
        pending = await add_company("Awaiting Review", status=COMPANY_STATUS_PENDING)
        companies = CompanyService(notifications=AsyncMock())
        admin = AdminService(notifications=AsyncMock())

        await admin.approve(db, uuid4(), pending.id)
        second = await admin.approve(db, uuid4(), pending.id)

        assert second.changed is False
        page = await companies.search_companies(db, CompanyFilters())
        assert [item.name for item in page.items] == ["Awaiting Review"]
