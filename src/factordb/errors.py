# src/factordb/errors.py
from __future__ import annotations


class UserInputError(ValueError):
    """Bad number or bad configuration supplied by the caller."""


class FactorDbError(Exception):
    """
    Base class for failures of a FactorDB query.

    The underlying exception (requests error, JSON error, ...) is kept
    as ``cause`` and is also chained as ``__cause__`` when raised with
    ``raise ... from exc``.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class HttpError(FactorDbError):
    """Connection failure, timeout or a non-2xx HTTP status."""

    def __init__(self, message: str, cause: BaseException | None = None, status_code: int | None = None):
        super().__init__(message, cause)
        self.status_code = status_code


class ParseError(FactorDbError):
    """The service answered, but the body is not a valid factorization record."""
