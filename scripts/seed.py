"""
Seed script - populates the database with sample directory data for development.

Usage:
    python -m scripts.seed

Creates one ADMIN and one USER profile (ids must match subjects issued by
your local identity provider) plus a handful of listings in every status,
so browse, filters and the review queue all have something to show.

This script is IDEMPOTENT - running it twice won't create duplicates.
It checks for existing data before inserting.
"""
import asyncio
import sys
import os
from uuid import UUID

# Add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.database import async_session_maker, init_db
from app.models.user import User, ROLE_ADMIN, ROLE_USER
from app.models.company import (
    Company,
    COMPANY_STATUS_APPROVED,
    COMPANY_STATUS_PENDING,
    COMPANY_STATUS_REJECTED,
)
from app.models.user_company import RELATION_OWNER
from app.repositories.company_repository import CompanyRepository
from app.services.slug_service import slugify
from sqlalchemy import select


# ─── Profiles ─────────────────────────────────────────────────

ADMIN_USER = {
    "id": UUID("00000000-0000-4000-8000-000000000001"),
    "email": "admin@controlcompass.dev",
    "name": "Admin User",
    "role": ROLE_ADMIN,
}

TEST_USER = {
    "id": UUID("00000000-0000-4000-8000-000000000002"),
    "email": "owner@controlcompass.dev",
    "name": "Listing Owner",
    "role": ROLE_USER,
}


# ─── Listings ─────────────────────────────────────────────────
# (country, state, region); state None serves the whole country.

COMPANIES = [
    {
        "name": "Acme Panels, Inc.",
        "description": "UL 508A panel shop building MCCs and PLC enclosures.",
        "website_url": "https://acmepanels.example.com",
        "phone": "+1 512 555 0100",
        "sales_email": "sales@acmepanels.example.com",
        "hq_city": "Austin",
        "hq_state": "TX",
        "year_founded": 1998,
        "size_bucket": "SIZE_51_200",
        "status": COMPANY_STATUS_APPROVED,
        "services": ["CONTROL_PANEL_ASSEMBLY"],
        "certifications": ["UL_508A", "ISO_9001"],
        "locations": [("US", "TX", None), ("US", "OK", None), ("US", "LA", None)],
    },
    {
        "name": "Pacific Automation Group",
        "description": "System integrator for water, wastewater and food & beverage.",
        "website_url": "https://pacificautomation.example.com",
        "phone": "+1 916 555 0142",
        "sales_email": "hello@pacificautomation.example.com",
        "hq_city": "Sacramento",
        "hq_state": "CA",
        "year_founded": 2007,
        "size_bucket": "SIZE_11_50",
        "status": COMPANY_STATUS_APPROVED,
        "services": ["SYSTEM_INTEGRATION", "CALIBRATION_SERVICES"],
        "certifications": ["ISA_84", "NFPA_70E"],
        "locations": [("US", "CA", "Northern California"), ("US", "NV", None)],
    },
    {
        "name": "Great Lakes Controls",
        "description": "Nationwide calibration and SIS verification services.",
        "website_url": "https://greatlakescontrols.example.com",
        "phone": "+1 216 555 0199",
        "sales_email": "sales@greatlakescontrols.example.com",
        "hq_city": "Cleveland",
        "hq_state": "OH",
        "year_founded": 1985,
        "size_bucket": "SIZE_201_500",
        "status": COMPANY_STATUS_APPROVED,
        "services": ["CALIBRATION_SERVICES", "SYSTEM_INTEGRATION"],
        "certifications": ["IEC_61511", "SIL_CERTIFIED", "ISO_9001"],
        "locations": [("US", None, None)],
    },
    {
        "name": "Bayou Instrumentation",
        "description": "Instrument calibration for refineries along the Gulf Coast.",
        "website_url": "https://bayouinstrumentation.example.com",
        "phone": "+1 225 555 0123",
        "sales_email": "info@bayouinstrumentation.example.com",
        "hq_city": "Baton Rouge",
        "hq_state": "LA",
        "year_founded": 2015,
        "size_bucket": "SIZE_1_10",
        "status": COMPANY_STATUS_PENDING,
        "services": ["CALIBRATION_SERVICES"],
        "certifications": ["OSHA_30"],
        "locations": [("US", "LA", None), ("US", "TX", "Gulf Coast")],
    },
    {
        "name": "Summit Panel Works",
        "description": "Custom control panels for HVAC OEMs.",
        "website_url": "https://summitpanels.example.com",
        "phone": "+1 303 555 0177",
        "sales_email": "quotes@summitpanels.example.com",
        "hq_city": "Denver",
        "hq_state": "CO",
        "year_founded": 2011,
        "size_bucket": "SIZE_11_50",
        "status": COMPANY_STATUS_REJECTED,
        "services": ["CONTROL_PANEL_ASSEMBLY"],
        "certifications": [],
        "locations": [("US", "CO", None)],
    },
]


async def _ensure_user(db, data: dict) -> User:
    user = (await db.execute(select(User).where(User.id == data["id"]))).scalar_one_or_none()
    if user:
        print(f"  User {data['email']} already exists, skipping...")
        return user
    user = User(**data)
    db.add(user)
    await db.flush()
    print(f"  Created {data['role']} user {data['email']}")
    return user


async def seed():
    """Run the seed process."""
    print("Seeding database...")

    # Initialize tables
    await init_db()
    print("  Tables created")

    company_repo = CompanyRepository()

    async with async_session_maker() as db:

        # ── Users ──────────────────────────────────────────
        await _ensure_user(db, ADMIN_USER)
        owner = await _ensure_user(db, TEST_USER)

        # ── Companies ──────────────────────────────────────
        created = 0
        for c in COMPANIES:
            c = dict(c)
            services = c.pop("services")
            certifications = c.pop("certifications")
            locations = c.pop("locations")
            slug = slugify(c["name"])

            existing = await db.execute(select(Company).where(Company.slug == slug))
            if existing.scalar_one_or_none():
                continue

            company = await company_repo.create(db, slug=slug, **c)
            await company_repo.replace_children(
                db,
                company.id,
                services=services,
                certifications=certifications,
                locations=locations,
            )
            await company_repo.add_member(
                db, user_id=owner.id, company_id=company.id, relation=RELATION_OWNER
            )
            created += 1

        print(f"  Created {created} companies ({len(COMPANIES) - created} already present)")

        # Commit everything
        await db.commit()
        print()
        print("Seed complete!")
        print(f"  Admin subject: {ADMIN_USER['id']}")
        print(f"  Owner subject: {TEST_USER['id']}")


if __name__ == "__main__":
    asyncio.run(seed())
