"""
Gateway errors.

Callers only ever see BackendOperationFailed. Whatever the backend raised
(connectivity, constraint violation, a row with a missing column) is
caught at the handler boundary and re-wrapped with its message intact.
"""

from typing import Any, Dict

from sqlalchemy.exc import DBAPIError

from inventory_gateway.core.constants import HTTP_INTERNAL_SERVER_ERROR


class RowMappingError(ValueError):
    """A backend row is missing a field its view model requires."""

    def __init__(self, table: str, field: str):
        self.table = table
        self.field = field
        super().__init__(f"Row from '{table}' is missing required field '{field}'")


class BackendOperationFailed(Exception):
    """
    Uniform failure envelope for every gateway operation.

    Attributes:
        status: Numeric status (a generic server error by default)
        message: Human-readable message taken verbatim from the backend
    """

    def __init__(self, message: str, status: int = HTTP_INTERNAL_SERVER_ERROR):
        self.status = status
        self.message = message
        super().__init__(message)

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        status: int = HTTP_INTERNAL_SERVER_ERROR
    ) -> "BackendOperationFailed":
        """
        Wrap any exception raised during a backend round trip.

        DBAPI errors carry the driver's original message in `orig`; that is
        the text the backend produced, without SQLAlchemy's statement dump.
        """
        if isinstance(exc, cls):
            return exc
        if isinstance(exc, DBAPIError) and exc.orig is not None:
            message = str(exc.orig)
        else:
            message = str(exc)
        return cls(message, status=status)

    def to_envelope(self) -> Dict[str, Any]:
        """Return the `{status, message}` shape handed to callers."""
        return {"status": self.status, "message": self.message}

    def __repr__(self) -> str:
        return f"<BackendOperationFailed(status={self.status}, message={self.message!r})>"
