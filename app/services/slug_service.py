"""
Slug generation and uniqueness resolution for company URLs.

slugify() is pure. SlugService.resolve_unique() only *pre-checks* the
companies table: two concurrent submissions can resolve the same slug, and
the uq_companies_slug constraint decides which insert wins.
"""
import re
import unicodedata
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import SlugResolutionException
from app.core.logging import get_logger
from app.repositories.company_repository import CompanyRepository

logger = get_logger(__name__)

DEFAULT_SLUG = "company"

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(name: Optional[str]) -> str:
    """
    "Acme Panels, Inc." -> "acme-panels-inc"

    Output only contains [a-z0-9-], never starts/ends with a hyphen and
    never has two in a row. Falls back to DEFAULT_SLUG when nothing is left.
    """
    if not name:
        return DEFAULT_SLUG
    ascii_name = (
        unicodedata.normalize("NFKD", name)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    slug = _DISALLOWED.sub("", ascii_name)
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _HYPHENS.sub("-", slug).strip("-")
    return slug or DEFAULT_SLUG


class SlugService:
    """Finds the first free `base`, `base-1`, `base-2`, ... slug."""

    def __init__(self, company_repo: Optional[CompanyRepository] = None):
        self.company_repo = company_repo or CompanyRepository()

    async def resolve_unique(
        self,
        db: AsyncSession,
        base: str,
        *,
        exclude_id: Optional[UUID] = None,
        max_attempts: Optional[int] = None,
    ) -> str:
        """
        Return the first candidate not present in the companies table.

        Raises:
            SlugResolutionException: If `max_attempts` candidates are all taken.
        """
        attempts = max_attempts or settings.slug_max_attempts

        for counter in range(attempts):
            candidate = base if counter == 0 else f"{base}-{counter}"
            if not await self.company_repo.slug_exists(db, candidate, exclude_id=exclude_id):
                return candidate

        logger.warning("slug_resolution_exhausted", base_slug=base, attempts=attempts)
        raise SlugResolutionException(base)
