"""Domain exceptions.

Typed errors surfaced by the catalog core. Callers receive one of these,
never a raw storage exception, so they can tell "not found" from
"conflict" from "unexpected failure" and pick their own retry policy.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors inherit from this class so the API layer can map
    them to responses in one place.
    """

    error_code = "CATALOG_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Caller Errors
# ============================================================================


class InvalidArgumentError(CatalogError):
    """Raised when a malformed identifier or pagination value reaches the core."""

    error_code = "INVALID_ARGUMENT"

    def __init__(self, argument: str, value: Any, reason: str) -> None:
        """Initialize invalid argument error.

        Args:
            argument: Name of the offending argument.
            value: The rejected value.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {argument} {value!r}: {reason}",
            details={"argument": argument, "value": str(value), "reason": reason},
        )


class NotFoundError(CatalogError):
    """Raised when no product matches a read, update or delete target."""

    error_code = "NOT_FOUND"

    def __init__(self, lookup: str, value: str) -> None:
        """Initialize not found error.

        Args:
            lookup: How the product was looked up ("id" or "term").
            value: The identifier or term that matched nothing.
        """
        super().__init__(
            f"Product with {lookup} {value!r} not found",
            details={"lookup": lookup, "value": value},
        )


# ============================================================================
# Storage Errors
# ============================================================================


class ConstraintViolationError(CatalogError):
    """Raised when a uniqueness or other integrity rule is violated."""

    error_code = "CONSTRAINT_VIOLATION"

    def __init__(self, detail: str, code: str | None = None) -> None:
        """Initialize constraint violation error.

        Args:
            detail: Storage detail naming the violated constraint.
            code: SQLSTATE classification code, when the driver reports one.
        """
        super().__init__(
            f"Duplicate or invalid value: {detail}",
            details={"code": code} if code else {},
        )
        self.detail = detail
        self.code = code


class StorageError(CatalogError):
    """Raised for any other persistence failure.

    The underlying detail is logged, never exposed in the message.
    """

    error_code = "STORAGE_ERROR"

    def __init__(self, operation: str) -> None:
        """Initialize storage error.

        Args:
            operation: Catalog operation that failed.
        """
        super().__init__(
            "Unexpected storage error, check server logs",
            details={"operation": operation},
        )
        self.operation = operation


# ============================================================================
# Coordinator Errors
# ============================================================================


class InvalidStateTransitionError(CatalogError):
    """Raised when a transaction is driven through an invalid state change."""

    error_code = "INVALID_STATE_TRANSITION"

    def __init__(
        self,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            current_state: Current state of the transaction.
            target_state: Attempted target state.
            allowed_transitions: States reachable from the current state.
        """
        allowed = allowed_transitions or []
        super().__init__(
            f"Cannot transition transaction from '{current_state}' to "
            f"'{target_state}'. Allowed transitions: {allowed}",
            details={
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )
