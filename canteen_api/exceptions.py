"""
Canteen API — Custom Exception Hierarchy
=========================================

What:  Defines application-specific exceptions for the outcomes a handler can
       end in besides success.
Why:   Services raise these instead of building error responses by hand; global
       exception handlers (registered in main.py) turn them into the response
       envelope with the right status code.
How:   Each exception carries a user-facing message and an optional context
       dict. The context is logged server-side and never returned.

Exception Hierarchy:
    CanteenAPIError (base)   → 500
    ├── NotFoundError        → 404 Not Found
    └── DatabaseError        → 500 Internal Server Error (carries `kind`)

DatabaseError.kind:
    The wire message for every database failure is the same generic
    "Internal server error". The `kind` discriminator keeps constraint
    violations, transport failures and empty writes apart in the logs.
"""

from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy.exc import (
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class CanteenAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = INTERNAL_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(CanteenAPIError):
    """
    Raised when a lookup or delete keyed by identifier matched nothing, or a
    listing came back empty.

    The message is resource-specific ("canteen not found", "menu not found").
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class DatabaseErrorKind(str, Enum):
    """Internal classification of a failed repository call."""

    CONSTRAINT = "constraint"   # FK / unique / NOT NULL violation
    TRANSPORT = "transport"     # connection refused, dropped, timed out
    NO_ROW = "no_row"           # a write expected to return a row returned none
    UNKNOWN = "unknown"


class DatabaseError(CanteenAPIError):
    """
    Raised when a repository call fails or a write reports no affected row.

    Security Note:
        The message returned to the client is always generic. The kind, the
        original exception type and any identifiers go to the log only.
    """

    status_code = 500

    def __init__(
        self,
        kind: DatabaseErrorKind = DatabaseErrorKind.UNKNOWN,
        message: str = INTERNAL_ERROR_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["kind"] = kind.value
        super().__init__(message=message, context=ctx)
        self.kind = kind

    @classmethod
    def from_exception(
        cls, exc: BaseException, context: Optional[Dict[str, Any]] = None
    ) -> "DatabaseError":
        """Wraps a driver/ORM exception, keeping its kind and type name."""
        ctx = dict(context or {})
        ctx["original_error"] = type(exc).__name__
        return cls(kind=classify_db_error(exc), context=ctx)


def classify_db_error(exc: BaseException) -> DatabaseErrorKind:
    """Maps an exception raised by the datastore to a DatabaseErrorKind."""
    if isinstance(exc, IntegrityError):
        return DatabaseErrorKind.CONSTRAINT
    if isinstance(exc, (OperationalError, InterfaceError, OSError)):
        return DatabaseErrorKind.TRANSPORT
    if isinstance(exc, SQLAlchemyError) and getattr(exc, "connection_invalidated", False):
        return DatabaseErrorKind.TRANSPORT
    return DatabaseErrorKind.UNKNOWN
