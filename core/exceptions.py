"""
==============================================
Exception hierarchy for the query builder.
==============================================

Every error surfaced by the builder derives from QueryBuilderError, so
callers can catch the whole family at once or pick a specific kind.

Classes:
    QueryBuilderError: Base class for all builder errors
    InvalidSlotError: A query slot id that was never allocated or never executed
    MalformedClauseError: A clause argument that cannot be rendered safely
    OperationNotSetError: run/compile on a descriptor with no verb chosen
    QueryExecutionError: The underlying statement reported a failure
"""

from typing import Any, Optional


class QueryBuilderError(Exception):
    """Base exception for all query builder errors."""
    pass


class InvalidSlotError(QueryBuilderError, LookupError):
    """Exception raised when a slot id is unknown or has no execution record."""

    def __init__(self, slot_id: int, reason: str = 'was never allocated'):
        self.slot_id = slot_id
        super().__init__(f"Query slot {slot_id} {reason}")


class MalformedClauseError(QueryBuilderError, ValueError):
    """Exception raised when a clause argument is rejected at build time."""
    pass


class OperationNotSetError(QueryBuilderError):
    """Exception raised when a query is rendered before any verb was chosen."""

    def __init__(self, slot_id: int):
        self.slot_id = slot_id
        super().__init__(
            f"Query slot {slot_id} has no operation; call select/insert/update/delete first"
        )


class QueryExecutionError(QueryBuilderError):
    """Exception raised when the driver reports a failed statement execution.

    Attributes:
        code: Driver error code (may be None when the driver exposes none)
        message: Driver error message
        sql: The rendered SQL that failed
    """

    def __init__(self, code: Any, message: str, sql: Optional[str] = None):
        self.code = code
        self.message = message
        self.sql = sql
        super().__init__(f"Database error {code} - {message}")
