"""Tests for the browse filter compiler.

Predicates are checked by compiling the statement with the PostgreSQL
dialect, so no database is needed.
"""

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from app.models.company import Company
from app.repositories.company_filters import CompanyFilters, build_company_filters, split_csv


def compile_where(filters: CompanyFilters) -> str:
    stmt = select(Company.id).where(*build_company_filters(filters))
    return str(
        stmt.compile(
            dialect=postgresql.dialect(),
            compile_kwargs={"literal_binds": True},
        )
    )


class TestFromQuery:

    def test_split_csv_trims_and_dedupes(self):
        assert split_csv(" ISO_9001, UL_508A,,ISO_9001 ") == ["ISO_9001", "UL_508A"]
        assert split_csv(None) == []

    def test_normalization(self):
        filters = CompanyFilters.from_query(
            search="  panel ",
            location=" tx",
            areas_served="ca, tx",
            certifications="ISO_9001",
        )
        assert filters.search == "panel"
        assert filters.location == "TX"
        assert filters.areas_served == ["CA", "TX"]
        assert filters.certifications == ["ISO_9001"]

    def test_blank_parameters_are_empty(self):
        assert CompanyFilters.from_query(search="  ", service="", areas_served=" , ").is_empty


class TestBuildCompanyFilters:

    def test_status_predicate_always_first(self):
        predicates = build_company_filters(CompanyFilters())
        assert len(predicates) == 1
        assert "companies.status = 'APPROVED'" in compile_where(CompanyFilters())

    def test_search_matches_name_or_description(self):
        sql = compile_where(CompanyFilters(search="panel"))
        assert "LIKE" in sql
        assert "companies.name" in sql
        assert "companies.description" in sql
        assert "'panel'" in sql
        assert " OR " in sql

    def test_search_wildcards_are_escaped(self):
        sql = compile_where(CompanyFilters(search="100%_"))
        assert "'100/%" in sql
        assert "/_'" in sql
        assert "ESCAPE '/'" in sql

    def test_certifications_are_a_union(self):
        sql = compile_where(CompanyFilters(certifications=["ISO_9001", "UL_508A"]))
        assert sql.count("EXISTS") == 1
        assert "company_certifications.certification IN ('ISO_9001', 'UL_508A')" in sql

    def test_unknown_certifications_are_dropped(self):
        sql = compile_where(CompanyFilters(certifications=["ISO_9001", "MADE_UP"]))
        assert "'MADE_UP'" not in sql
        assert "'ISO_9001'" in sql

    def test_only_unknown_certifications_match_nothing(self):
        sql = compile_where(CompanyFilters(certifications=["MADE_UP"]))
        assert "false" in sql
        assert "EXISTS" not in sql

    def test_areas_served_include_country_wildcard(self):
        sql = compile_where(CompanyFilters(areas_served=["CA"]))
        assert "company_locations_served.state IN ('CA')" in sql
        assert "company_locations_served.country = 'US'" in sql
        assert "company_locations_served.state IS NULL" in sql

    def test_unknown_state_codes_are_dropped(self):
        sql = compile_where(CompanyFilters(areas_served=["CA", "ZZ"]))
        assert "state IN ('CA')" in sql
        assert "'ZZ'" not in sql

    def test_only_unknown_state_codes_match_nothing(self):
        sql = compile_where(CompanyFilters(areas_served=["NOT_A_STATE"]))
        assert "false" in sql
        assert "EXISTS" not in sql

    def test_service_filter(self):
        sql = compile_where(CompanyFilters(service="SYSTEM_INTEGRATION"))
        assert "EXISTS" in sql
        assert "company_services.service = 'SYSTEM_INTEGRATION'" in sql

    def test_unknown_service_and_size_match_nothing(self):
        assert "false" in compile_where(CompanyFilters(service="WELDING"))
        assert "false" in compile_where(CompanyFilters(size="HUGE"))

    def test_location_and_size_are_equality(self):
        sql = compile_where(CompanyFilters(location="TX", size="SIZE_11_50"))
        assert "companies.hq_state = 'TX'" in sql
        assert "companies.size_bucket = 'SIZE_11_50'" in sql

    def test_dimensions_are_anded(self):
        filters = CompanyFilters(
            search="panel",
            service="CONTROL_PANEL_ASSEMBLY",
            location="TX",
            size="SIZE_1_10",
            certifications=["UL_508A"],
            areas_served=["TX"],
        )
        predicates = build_company_filters(filters)
        assert len(predicates) == 7
        assert compile_where(filters).count("EXISTS") == 3
