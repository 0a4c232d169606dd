"""Tests for the listing aggregator's batched child queries."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from app.repositories.company_repository import CompanyRepository


def rows(values) -> MagicMock:
    result = MagicMock()
    result.all.return_value = values
    result.scalars.return_value.all.return_value = values
    return result


class TestLoadChildren:

    @pytest.mark.asyncio
    async def test_empty_batch_runs_no_queries(self):
        db = AsyncMock()
        assert await CompanyRepository().load_children(db, []) == {}
        db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_three_queries_for_any_batch_size(self):
        with_children, without_children = uuid4(), uuid4()
        location = SimpleNamespace(company_id=with_children, country="US", state=None, region=None)
        db = AsyncMock()
        db.execute.side_effect = [
            rows([(with_children, "CONTROL_PANEL_ASSEMBLY"), (with_children, "SYSTEM_INTEGRATION")]),
            rows([(with_children, "UL_508A")]),
            rows([location]),
        ]

        children = await CompanyRepository().load_children(db, [with_children, without_children])

        assert db.execute.await_count == 3
        assert children[with_children].services == ["CONTROL_PANEL_ASSEMBLY", "SYSTEM_INTEGRATION"]
        assert children[with_children].certifications == ["UL_508A"]
        assert children[with_children].locations_served == [location]
        assert children[without_children].services == []
        assert children[without_children].certifications == []
        assert children[without_children].locations_served == []
