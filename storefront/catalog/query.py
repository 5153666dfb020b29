"""Filter and pagination engine for product listings.

Turns optional search/gender/size parameters into SQL predicates and
derives page metadata from a filtered total.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import or_

from storefront.catalog.models import Product, array_contains
from storefront.domain.exceptions import InvalidArgumentError
from storefront.domain.value_objects import Gender

T = TypeVar("T")

DEFAULT_LIMIT = 10


@dataclass
class ProductFilter:
    """Filter parameters for product search.

    Attributes:
        search: Case-insensitive substring of title or description.
        gender: Exact gender match.
        size: Size code the product must be offered in.
    """

    search: str | None = None
    gender: Gender | None = None
    size: str | None = None


@dataclass
class PaginationParams:
    """Offset-based pagination parameters.

    Attributes:
        limit: Items per page, strictly positive.
        offset: Number of items to skip.
    """

    limit: int = DEFAULT_LIMIT
    offset: int = 0

    def validate(self) -> None:
        """Reject values the engine cannot page with.

        Raises:
            InvalidArgumentError: If limit is not positive or offset is negative.
        """
        if self.limit <= 0:
            raise InvalidArgumentError("limit", self.limit, "must be greater than 0")
        if self.offset < 0:
            raise InvalidArgumentError("offset", self.offset, "must not be negative")


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on this page.
        total: Count of all items matching the filters.
        limit: Items per page.
        offset: Items skipped before this page.
    """

    items: list[T]
    total: int
    limit: int
    offset: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.limit - 1) // self.limit

    @property
    def current_page(self) -> int:
        """Calculate the 1-based page the offset falls on."""
        return self.offset // self.limit + 1

    @property
    def has_next_page(self) -> bool:
        """Check if there's a next page."""
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        """Check if there's a previous page."""
        return self.current_page > 1

    def metadata(self) -> dict[str, Any]:
        """Get pagination metadata.

        Returns:
            The seven page metadata fields.
        """
        return {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_conditions(filters: ProductFilter) -> list[Any]:
    """Build SQL predicates for the supplied filters.

    Absent or empty filters add no predicate.

    Args:
        filters: Filter parameters.

    Returns:
        Predicates to combine with AND.

    Raises:
        InvalidArgumentError: If gender is outside the enumeration.
    """
    conditions = []

    if filters.search:
        search_pattern = f"%{escape_like(filters.search)}%"
        conditions.append(
            or_(
                Product.title.ilike(search_pattern, escape="\\"),
                Product.description.ilike(search_pattern, escape="\\"),
            )
        )

    if filters.gender is not None:
        try:
            gender = Gender(filters.gender)
        except ValueError:
            raise InvalidArgumentError(
                "gender", filters.gender, f"must be one of {[g.value for g in Gender]}"
            ) from None
        conditions.append(Product.gender == gender.value)

    if filters.size:
        conditions.append(array_contains(Product.sizes, filters.size))

    return conditions
