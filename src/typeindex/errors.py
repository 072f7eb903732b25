"""Error types raised by the type index registry.

Two families:
  * ``InvalidRequestError``: bad arguments or profile state, raised before
    any network call is made.
  * ``RemoteOperationError``: a create/patch/fetch step failed. The ``code``
    names the step and the original exception is kept as ``__cause__``.

``TypeIndexError`` is also raised directly by ``DocumentClient`` for
transport-level failures; registry operations wrap those in
``RemoteOperationError``.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    # Validation
    PROFILE_MISSING = "PROFILE_MISSING"
    PROFILE_NOT_LOADED = "PROFILE_NOT_LOADED"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_LOCATION_TYPE = "INVALID_LOCATION_TYPE"
    INDEX_MISSING = "INDEX_MISSING"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Document client
    DOCUMENT_NOT_FOUND = "DOCUMENT_NOT_FOUND"
    REQUEST_FAILED = "REQUEST_FAILED"
    PARSE_FAILED = "PARSE_FAILED"

    # Registry steps
    PUBLIC_INDEX_CREATE_FAILED = "PUBLIC_INDEX_CREATE_FAILED"
    PROFILE_UPDATE_FAILED = "PROFILE_UPDATE_FAILED"
    PRIVATE_INDEX_CREATE_FAILED = "PRIVATE_INDEX_CREATE_FAILED"
    PREFERENCES_UPDATE_FAILED = "PREFERENCES_UPDATE_FAILED"
    INDEX_UPDATE_FAILED = "INDEX_UPDATE_FAILED"


class TypeIndexError(Exception):
    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class InvalidRequestError(TypeIndexError):
    """Arguments or profile state rejected before any I/O."""


class ConfigurationError(InvalidRequestError):
    def __init__(self, message: str) -> None:
        super().__init__(ErrorCode.CONFIGURATION_ERROR, message)


class RemoteOperationError(TypeIndexError):
    """A remote step of a registry operation failed.

    Earlier steps are not rolled back, so the remote documents may be
    partially linked when this is raised.
    """
