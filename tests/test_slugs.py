"""Tests for slug generation and uniqueness resolution."""

import re
from unittest.mock import AsyncMock

import pytest

from app.core.exceptions import SlugResolutionException
from app.services.slug_service import DEFAULT_SLUG, SlugService, slugify

SLUG_SHAPE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class TestSlugify:

    def test_company_name_with_punctuation(self):
        assert slugify("Acme Panels, Inc.") == "acme-panels-inc"

    @pytest.mark.parametrize("name", ["", "!!!", "   ", None, "---"])
    def test_nothing_usable_falls_back(self, name):
        assert slugify(name) == DEFAULT_SLUG

    def test_edge_hyphens_and_runs_collapse(self):
        assert slugify("  --Foo   Bar--  ") == "foo-bar"
        assert slugify("A & B") == "a-b"
        assert slugify("Tri--State -- Controls") == "tri-state-controls"

    def test_accents_are_transliterated(self):
        assert slugify("Café Müller Automação") == "cafe-muller-automacao"

    @pytest.mark.parametrize(
        "name",
        [
            "Acme Panels, Inc.",
            "  leading and trailing  ",
            "UL-508A // Panels & Co.",
            "123 Main St. Controls",
            "Ünïcödé Ñame",
            "tabs\tand\nnewlines",
        ],
    )
    def test_output_shape(self, name):
        slug = slugify(name)
        assert SLUG_SHAPE.match(slug), slug


class TestResolveUnique:

    @staticmethod
    def _service(taken):
        repo = AsyncMock()
        repo.slug_exists.side_effect = lambda db, slug, exclude_id=None: slug in taken
        return SlugService(repo), repo

    @pytest.mark.asyncio
    async def test_free_base_is_kept(self):
        service, _ = self._service(set())
        assert await service.resolve_unique(AsyncMock(), "acme") == "acme"

    @pytest.mark.asyncio
    async def test_first_collision_gets_suffix_one(self):
        service, _ = self._service({"acme"})
        assert await service.resolve_unique(AsyncMock(), "acme") == "acme-1"

    @pytest.mark.asyncio
    async def test_counter_keeps_climbing(self):
        service, _ = self._service({"acme", "acme-1"})
        assert await service.resolve_unique(AsyncMock(), "acme") == "acme-2"

    @pytest.mark.asyncio
    async def test_exclude_id_is_forwarded(self):
        service, repo = self._service(set())
        marker = object()
        await service.resolve_unique(AsyncMock(), "acme", exclude_id=marker)
        assert repo.slug_exists.await_args.kwargs["exclude_id"] is marker

    @pytest.mark.asyncio
    async def test_exhausted_attempts_raise(self):
        service, repo = self._service({"acme", "acme-1", "acme-2"})
        with pytest.raises(SlugResolutionException) as exc_info:
            await service.resolve_unique(AsyncMock(), "acme", max_attempts=3)
        assert exc_info.value.status_code == 409
        assert exc_info.value.base_slug == "acme"
        assert repo.slug_exists.await_count == 3
