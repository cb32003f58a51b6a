"""Error taxonomy and classification for structured error handling.

Every failure a lookup can produce falls into one of three classes:

- invalid input: the caller supplied a value that fails a precondition,
  rejected before the store is contacted
- not found: the query succeeded but matched nothing
- store: the database could not answer

Each exception carries the HTTP status it renders as, so the API
boundary maps exceptions to responses without a lookup table.
"""

from __future__ import annotations

from enum import Enum

NO_RESULT = "no result"


class OidExplorerError(Exception):
    """Base class for all errors raised by lookups."""

    status_code = 500


class InvalidInputError(OidExplorerError):
    status_code = 400


class NotFoundError(OidExplorerError):
    status_code = 404

    def __init__(self, message: str = NO_RESULT) -> None:
        super().__init__(message)


class StoreError(OidExplorerError):
    """The database was unreachable or a query failed."""

    status_code = 500


class ErrorClass(Enum):
    INVALID_INPUT = "invalid_input"  # 400, caller's fault
    NOT_FOUND = "not_found"  # 404, well-formed query, no rows
    STORE = "store"  # 500, database failure
    UNKNOWN = "unknown"  # unclassified bug


def classify_error(error: Exception) -> ErrorClass:
    """Classify an error by its ``status_code`` attribute."""
    if not isinstance(error, OidExplorerError):
        return ErrorClass.UNKNOWN

    status_code = error.status_code
    if status_code == 400:
        return ErrorClass.INVALID_INPUT
    if status_code == 404:
        return ErrorClass.NOT_FOUND
    if status_code >= 500:
        return ErrorClass.STORE
    return ErrorClass.UNKNOWN


def status_code_for(error: Exception) -> int:
    """HTTP status for an error; unclassified errors are 500."""
    if isinstance(error, OidExplorerError):
        return error.status_code
    return 500
