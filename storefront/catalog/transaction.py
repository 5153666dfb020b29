"""Transaction coordinator for catalog operations.

Every catalog call runs inside exactly one ``CatalogTransaction``: a fresh
session, one database transaction, commit on success, rollback on any
failure, and the session closed in every case. Storage exceptions never
leave this module untranslated.
"""

from types import TracebackType

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.domain.exceptions import (
    CatalogError,
    ConstraintViolationError,
    StorageError,
)
from storefront.domain.state_machines import TransactionState

logger = structlog.get_logger()

# SQLSTATE class 23: integrity constraint violation
INTEGRITY_VIOLATION_CLASS = "23"


# ============================================================================
# Error Translation
# ============================================================================


def _error_code(exc: BaseException) -> str | None:
    """Extract the driver's classification code from a storage error."""
    orig = getattr(exc, "orig", None)
    for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
        code = getattr(orig, attr, None)
        if code:
            return str(code)
    return None


def _error_detail(exc: BaseException) -> str:
    """Extract the driver's detail message from a storage error."""
    orig = getattr(exc, "orig", None)
    if orig is None:
        return str(exc)
    # asyncpg keeps the server detail on the wrapped exception
    for source in (orig, getattr(orig, "__cause__", None)):
        detail = getattr(source, "detail", None)
        if detail:
            return str(detail)
    return str(orig)


def translate_error(exc: Exception, operation: str) -> CatalogError:
    """Map any failure inside a transaction to the catalog error taxonomy.

    Args:
        exc: The exception that aborted the transaction.
        operation: Catalog operation being performed.

    Returns:
        ``exc`` itself when it is already a CatalogError, a
        ConstraintViolationError for integrity failures, and a
        StorageError for everything else.
    """
    if isinstance(exc, CatalogError):
        return exc

    code = _error_code(exc)
    detail = _error_detail(exc)

    if isinstance(exc, IntegrityError) or (code or "").startswith(INTEGRITY_VIOLATION_CLASS):
        logger.warning(
            "Constraint violation",
            operation=operation,
            code=code,
            detail=detail,
        )
        return ConstraintViolationError(detail, code=code)

    logger.error(
        "Storage error",
        operation=operation,
        code=code,
        detail=detail,
        error_type=type(exc).__name__,
        storage_failure=isinstance(exc, SQLAlchemyError),
    )
    return StorageError(operation)


# ============================================================================
# Transaction
# ============================================================================


class CatalogTransaction:
    """Async context manager owning one session and one transaction.

    Example usage:
        async with CatalogTransaction(session_factory, "update") as session:
            repo = ProductRepository(session)
            ...

    Attributes:
        state: Current TransactionState.
        outcome: COMMITTED or ROLLED_BACK once the transaction finished.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        operation: str,
    ) -> None:
        """Initialize the transaction.

        Args:
            session_factory: Factory producing a fresh session per call.
            operation: Catalog operation name, used in logs and errors.
        """
        self.session_factory = session_factory
        self.operation = operation
        self.state = TransactionState.IDLE
        self.outcome: TransactionState | None = None
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> AsyncSession:
        self.state = self.state.transition_to(TransactionState.OPEN)
        self.outcome = None
        self.session = self.session_factory()
        try:
            await self.session.begin()
        except Exception as exc:
            await self._rollback(exc)
            await self._release()
            raise translate_error(exc, self.operation) from exc
        return self.session

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        try:
            if exc is None:
                try:
                    await self.session.commit()
                except Exception as commit_exc:
                    await self._rollback(commit_exc)
                    raise translate_error(commit_exc, self.operation) from commit_exc
                self.state = self.state.transition_to(TransactionState.COMMITTED)
                self.outcome = self.state
                return False

            await self._rollback(exc)
            if isinstance(exc, Exception):
                translated = translate_error(exc, self.operation)
                if translated is not exc:
                    raise translated from exc
            return False
        finally:
            await self._release()

    async def _rollback(self, cause: BaseException) -> None:
        """Roll back the open transaction.

        Raises:
            CatalogError: The translated failure when the rollback itself fails.
        """
        try:
            await self.session.rollback()
        except Exception as rollback_exc:
            raise translate_error(rollback_exc, self.operation) from rollback_exc
        finally:
            self.state = self.state.transition_to(TransactionState.ROLLED_BACK)
            self.outcome = self.state
            logger.info(
                "Transaction rolled back",
                operation=self.operation,
                error_type=type(cause).__name__,
            )

    async def _release(self) -> None:
        """Close the session and return to IDLE."""
        try:
            if self.session is not None:
                await self.session.close()
        finally:
            self.session = None
            self.state = self.state.transition_to(TransactionState.IDLE)


def transaction(
    session_factory: async_sessionmaker[AsyncSession],
    operation: str,
) -> CatalogTransaction:
    """Open a catalog transaction for one operation.

    Args:
        session_factory: Factory producing a fresh session per call.
        operation: Catalog operation name.

    Returns:
        Transaction to use with ``async with``.
    """
    return CatalogTransaction(session_factory, operation)
