from __future__ import annotations

from enum import Enum


class DocSearchError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidQueryError(DocSearchError):
    """Query text is missing or blank."""


class ErrorKind(str, Enum):
    CONFIGURATION = "configuration"
    AUTH = "auth"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    UNCLASSIFIED = "unclassified"


class SearchBackendError(DocSearchError):
    """A call to the search backend failed; ``kind`` says how."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED

    def __init__(self, message: str, kind: ErrorKind | None = None) -> None:
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class ConfigurationError(SearchBackendError):
    """Backend is unconfigured or could not be constructed."""

    kind = ErrorKind.CONFIGURATION


class AuthError(SearchBackendError):
    """Backend rejected the API key (401)."""

    kind = ErrorKind.AUTH


class ForbiddenError(SearchBackendError):
    """Backend refused access, usually a network rule (403)."""

    kind = ErrorKind.FORBIDDEN


class NotFoundError(SearchBackendError):
    """Index does not exist (404)."""

    kind = ErrorKind.NOT_FOUND


class SearchTimeoutError(SearchBackendError):
    """Backend did not answer in time."""

    kind = ErrorKind.TIMEOUT


class UnclassifiedSearchError(SearchBackendError):
    """Any other backend failure."""

    kind = ErrorKind.UNCLASSIFIED


_ERRORS_BY_KIND: dict[ErrorKind, type[SearchBackendError]] = {
    ErrorKind.CONFIGURATION: ConfigurationError,
    ErrorKind.AUTH: AuthError,
    ErrorKind.FORBIDDEN: ForbiddenError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.TIMEOUT: SearchTimeoutError,
    ErrorKind.UNCLASSIFIED: UnclassifiedSearchError,
}


def backend_error(kind: ErrorKind, message: str) -> SearchBackendError:
    """Build the exception subclass matching ``kind``."""
    return _ERRORS_BY_KIND[kind](message)
