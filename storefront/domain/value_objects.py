"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. This module also holds the small pure functions the
catalog applies to them: slug normalization, lookup parsing and the
explicit patch merge.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

from storefront.domain.exceptions import InvalidArgumentError


# ============================================================================
# Enumerations
# ============================================================================


class Gender(str, Enum):
    """Audience a product is made for."""

    MEN = "men"
    WOMEN = "women"
    KID = "kid"
    UNISEX = "unisex"


class Size(str, Enum):
    """Size codes a product can be offered in."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"


# ============================================================================
# Lookup Discriminator
# ============================================================================


@dataclass(frozen=True)
class ById:
    """Lookup of a product by its canonical UUID string."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ByTerm:
    """Lookup of a product by slug or title."""

    value: str

    def __str__(self) -> str:
        return self.value


Lookup = ById | ByTerm

# Hyphenated 8-4-4-4-12 form only; bare hex, braces and URNs are terms
_UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)


def is_product_id(value: str) -> bool:
    """Check whether a value is a hyphenated UUID string."""
    return isinstance(value, str) and _UUID_PATTERN.fullmatch(value) is not None


def parse_product_id(value: str) -> str:
    """Validate a product identifier.

    Args:
        value: Candidate identifier.

    Returns:
        Canonical lowercase, hyphenated UUID string.

    Raises:
        InvalidArgumentError: If value is not a well-formed UUID.
    """
    if not is_product_id(value):
        raise InvalidArgumentError("product id", value, "must be a valid UUID")
    return value.lower()


def parse_lookup(term: str) -> Lookup:
    """Decide once whether a term is an identifier or a slug/title.

    Args:
        term: Raw lookup term from the caller.

    Returns:
        ById when the term is a UUID, ByTerm otherwise.
    """
    if is_product_id(term):
        return ById(value=term.lower())
    return ByTerm(value=term.strip())


# ============================================================================
# Slugs
# ============================================================================


_WHITESPACE = re.compile(r"\s+")


def normalize_slug(value: str) -> str:
    """Normalize a title or raw slug into a URL-safe slug.

    Lowercases, drops apostrophes and collapses whitespace runs to a
    single hyphen.

    Args:
        value: Title or slug.

    Returns:
        Normalized slug.

    Raises:
        InvalidArgumentError: If nothing is left after normalization.
    """
    slug = _WHITESPACE.sub("-", value.strip().lower().replace("'", ""))
    if not slug:
        raise InvalidArgumentError("slug", value, "must contain at least one character")
    return slug


# ============================================================================
# Patch Merge
# ============================================================================


def merge_patch(target: Any, patch: dict[str, Any], fields: frozenset[str]) -> list[str]:
    """Apply a partial update onto a loaded record.

    Every attribute named in ``fields`` is overwritten when the patch
    specifies it and kept otherwise. Keys outside ``fields`` are ignored.

    Args:
        target: Loaded record to mutate.
        patch: Only the fields the caller actually supplied.
        fields: Attribute names the patch may touch.

    Returns:
        Names of the attributes that were written, in sorted order.
    """
    changed = []
    for name in sorted(fields):
        if name in patch:
            setattr(target, name, patch[name])
            changed.append(name)
    return changed
