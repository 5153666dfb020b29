"""Domain layer - value objects, state machines and errors.

This module exports the core domain building blocks of the catalog:

- **Value Objects**: Gender and Size enumerations, ById/ByTerm lookups
- **State Machines**: TransactionState for write transactions
- **Exceptions**: The typed error taxonomy returned to callers

Example usage:
    from storefront.domain import ById, parse_lookup

    lookup = parse_lookup("Men's Chill Crew Neck Sweatshirt")
    assert not isinstance(lookup, ById)
"""

from storefront.domain.exceptions import (
    CatalogError,
    ConstraintViolationError,
    InvalidArgumentError,
    InvalidStateTransitionError,
    NotFoundError,
    StorageError,
)
from storefront.domain.state_machines import TransactionState
from storefront.domain.value_objects import (
    ById,
    ByTerm,
    Gender,
    Lookup,
    Size,
    merge_patch,
    normalize_slug,
    parse_lookup,
    parse_product_id,
)

__all__ = [
    # Value objects
    "ById",
    "ByTerm",
    "Gender",
    "Lookup",
    "Size",
    "merge_patch",
    "normalize_slug",
    "parse_lookup",
    "parse_product_id",
    # State machines
    "TransactionState",
    # Exceptions
    "CatalogError",
    "ConstraintViolationError",
    "InvalidArgumentError",
    "InvalidStateTransitionError",
    "NotFoundError",
    "StorageError",
]
