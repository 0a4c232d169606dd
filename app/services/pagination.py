"""
Offset/limit windowing for the company browse endpoint.
"""
import math
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class PageWindow:
    page: int
    page_size: int
    total: int
    total_pages: int
    offset: int

    @property
    def is_past_end(self) -> bool:
        """True when the requested page has no rows (never an error)."""
        return self.offset >= self.total


def parse_page(raw: Optional[Any]) -> int:
    """Lenient 1-indexed page parsing: junk and values below 1 become 1."""
    try:
        page = int(raw)
    except (TypeError, ValueError):
        return 1
    return max(page, 1)


def paginate(total: int, page: Any, page_size: int) -> PageWindow:
    """Compute the window for `page` over `total` matching rows."""
    page = parse_page(page)
    total = max(total, 0)
    return PageWindow(
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size) if page_size else 0,
        offset=(page - 1) * page_size,
    )
