"""
Exceptions raised by the parcel ledger core and its store adapters.

Every error carries an ``ErrorCode`` so the HTTP layer can map it to a status
code without inspecting messages.

Usage:
    from parcels.errors import NotFoundError

    raise NotFoundError(f"No shipment with code {code}")
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes returned to API clients."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    STORE_ERROR = "STORE_ERROR"
    CONFLICT = "CONFLICT"
    TIMEOUT = "TIMEOUT"


HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.CONFLICT: 409,
    ErrorCode.STORE_ERROR: 502,
    ErrorCode.TIMEOUT: 504,
}


class ParcelsError(Exception):
    """Base exception for all parcel ledger errors."""

    default_code = ErrorCode.STORE_ERROR

    def __init__(self, message: str, code: ErrorCode | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS.get(self.code, 500)


class ValidationError(ParcelsError):
    """Required input is missing or malformed."""

    default_code = ErrorCode.VALIDATION_ERROR


class NotFoundError(ParcelsError):
    """A lookup by tracking code or id matched no row."""

    default_code = ErrorCode.NOT_FOUND


class StoreError(ParcelsError):
    """The store adapter reported a failure."""

    default_code = ErrorCode.STORE_ERROR


class ConflictError(StoreError):
    """A write lost against a concurrent writer or hit a uniqueness constraint."""

    default_code = ErrorCode.CONFLICT
