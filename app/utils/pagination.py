from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = 1_000_000


@dataclass
class Pagination:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> dict:
        """Page info returned next to a result slice"""
        return {
            "total": total,
            "page": self.page,
            "limit": self.limit,
            "total_pages": (total + self.limit - 1) // self.limit
        }


def parse_positive_int(value: Optional[str], default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def parse_pagination(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    default_limit: int = DEFAULT_LIMIT
) -> Pagination:
    """
    Build pagination from raw query values.

    Missing, non-numeric or non-positive values fall back to the defaults
    instead of failing the request. Limit is capped at MAX_LIMIT and page
    at MAX_PAGE, so the computed skip always fits the store's int64.
    """
    return Pagination(
        page=min(parse_positive_int(page, DEFAULT_PAGE), MAX_PAGE),
        limit=min(parse_positive_int(limit, default_limit), MAX_LIMIT)
    )
