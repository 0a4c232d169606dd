"""initial company directory schema

Revision ID: 001_directory_schema
Revises:
Create Date: 2026-10-19

Creates:
  • users                       - actor profiles keyed by identity-provider subject
  • companies                   - listings; slug unique (uq_companies_slug),
                                  seq identity for insertion order
  • company_services            - service tags, unique per company
  • company_certifications      - certifications, unique per company
  • company_locations_served    - served areas; state NULL = whole country,
                                  one row per (company, country, state)
  • user_companies              - OWNER / MEMBER links, unique per (user, company)

Every child table cascades on company delete.
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers
revision = "001_directory_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _company_fk():
    return sa.Column(
        "company_id",
        postgresql.UUID(as_uuid=True),
        sa.ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="USER"),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "companies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=220), nullable=False),
        sa.Column("seq", sa.BigInteger(), sa.Identity(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website_url", sa.Text(), nullable=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("sales_email", sa.String(length=255), nullable=True),
        sa.Column("hq_address", sa.String(length=255), nullable=True),
        sa.Column("hq_city", sa.String(length=120), nullable=True),
        sa.Column("hq_state", sa.String(length=10), nullable=True),
        sa.Column("hq_zip", sa.String(length=20), nullable=True),
        sa.Column("hq_country", sa.String(length=2), nullable=False, server_default="US"),
        sa.Column("year_founded", sa.Integer(), nullable=True),
        sa.Column("size_bucket", sa.String(length=20), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="PENDING"),
        *_timestamps(),
        sa.UniqueConstraint("slug", name="uq_companies_slug"),
        sa.UniqueConstraint("seq", name="uq_companies_seq"),
    )
    op.create_index("ix_companies_hq_state", "companies", ["hq_state"])
    op.create_index("ix_companies_status", "companies", ["status"])
    # Browse: WHERE status = 'APPROVED' ORDER BY created_at
    op.create_index("ix_companies_status_created", "companies", ["status", "created_at"])

    op.create_table(
        "company_services",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _company_fk(),
        sa.Column("service", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("company_id", "service", name="uq_company_service"),
    )
    op.create_index("ix_company_services_company_id", "company_services", ["company_id"])
    op.create_index("ix_company_services_service", "company_services", ["service"])

    op.create_table(
        "company_certifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _company_fk(),
        sa.Column("certification", sa.String(length=50), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("company_id", "certification", name="uq_company_certification"),
    )
    op.create_index("ix_company_certifications_company_id", "company_certifications", ["company_id"])
    op.create_index("ix_company_certifications_certification", "company_certifications", ["certification"])

    op.create_table(
        "company_locations_served",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        _company_fk(),
        sa.Column("country", sa.String(length=2), nullable=False),
        sa.Column("state", sa.String(length=10), nullable=True),
        sa.Column("region", sa.String(length=100), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_company_locations_served_company_id", "company_locations_served", ["company_id"])
    op.create_index("ix_company_locations_country_state", "company_locations_served", ["country", "state"])
    op.create_index(
        "uq_company_locations_area",
        "company_locations_served",
        ["company_id", "country", sa.text("coalesce(state, '')")],
        unique=True,
    )

    op.create_table(
        "user_companies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _company_fk(),
        sa.Column("relation", sa.String(length=20), nullable=False, server_default="OWNER"),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "company_id", name="uq_user_company"),
    )
    op.create_index("ix_user_companies_user_id", "user_companies", ["user_id"])
    op.create_index("ix_user_companies_company_id", "user_companies", ["company_id"])


def downgrade() -> None:
    op.drop_table("user_companies")
    op.drop_table("company_locations_served")
    op.drop_table("company_certifications")
    op.drop_table("company_services")
    op.drop_table("companies")
    op.drop_table("users")
