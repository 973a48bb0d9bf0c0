"""
Store error taxonomy for the sneaker collection repository.

Every failure surfaced by the Firestore client is translated into a single
``StoreError`` carrying a stable code, so callers handle one exception type
regardless of which transport or permission problem occurred.
"""

from typing import Any, Dict, Optional


class StoreErrorCode:
    """Store error codes for structured error responses."""

    NOT_FOUND = "NOT_FOUND"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    ABORTED = "ABORTED"
    UNAVAILABLE = "UNAVAILABLE"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    INTERNAL = "INTERNAL"
    IMPORT_ERROR = "IMPORT_ERROR"


# google-api-core exception class name -> store error code
_EXCEPTION_CODES: Dict[str, str] = {
    "NotFound": StoreErrorCode.NOT_FOUND,
    "PermissionDenied": StoreErrorCode.PERMISSION_DENIED,
    "Forbidden": StoreErrorCode.PERMISSION_DENIED,
    "Unauthenticated": StoreErrorCode.UNAUTHENTICATED,
    "Unauthorized": StoreErrorCode.UNAUTHENTICATED,
    "InvalidArgument": StoreErrorCode.INVALID_ARGUMENT,
    "BadRequest": StoreErrorCode.INVALID_ARGUMENT,
    "FailedPrecondition": StoreErrorCode.INVALID_ARGUMENT,
    "AlreadyExists": StoreErrorCode.ALREADY_EXISTS,
    "Conflict": StoreErrorCode.ALREADY_EXISTS,
    "Aborted": StoreErrorCode.ABORTED,
    "ServiceUnavailable": StoreErrorCode.UNAVAILABLE,
    "ConnectionError": StoreErrorCode.UNAVAILABLE,
    "RetryError": StoreErrorCode.UNAVAILABLE,
    "DeadlineExceeded": StoreErrorCode.DEADLINE_EXCEEDED,
    "GatewayTimeout": StoreErrorCode.DEADLINE_EXCEEDED,
    "TimeoutError": StoreErrorCode.DEADLINE_EXCEEDED,
    "ImportError": StoreErrorCode.IMPORT_ERROR,
    "ModuleNotFoundError": StoreErrorCode.IMPORT_ERROR,
}


def classify_store_error(error: BaseException) -> str:
    """
    Map an exception raised by the Firestore client to a store error code.

    Uses the exception class name first, then falls back to hints in the
    error message. Unknown errors are reported as INTERNAL.

    Example:
        >>> from google.api_core import exceptions
        >>> classify_store_error(exceptions.PermissionDenied("nope"))
        'PERMISSION_DENIED'
    """
    if isinstance(error, StoreError):
        return error.code

    code = _EXCEPTION_CODES.get(type(error).__name__)
    if code is not None:
        return code

    message = str(error).lower()
    if "permission" in message or "denied" in message:
        return StoreErrorCode.PERMISSION_DENIED
    if "unavailable" in message or "connection" in message:
        return StoreErrorCode.UNAVAILABLE

    return StoreErrorCode.INTERNAL


class StoreError(Exception):
    """
    Raised when the backing document store rejects or fails an operation.

    The original client exception is kept as ``__cause__``.

    Attributes:
        message: Error description
        code: One of the StoreErrorCode constants
        collection: Collection the operation targeted
        document: Document ID, if the operation targeted a single document
    """

    def __init__(
        self,
        message: str,
        code: str = StoreErrorCode.INTERNAL,
        collection: Optional[str] = None,
        document: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.collection = collection
        self.document = document
        super().__init__(message)

    @classmethod
    def from_exception(
        cls,
        error: BaseException,
        collection: Optional[str] = None,
        document: Optional[str] = None,
    ) -> "StoreError":
        """Build a StoreError describing ``error``. Callers chain with ``from``."""
        if isinstance(error, StoreError):
            return error
        return cls(
            f"{type(error).__name__}: {error}",
            code=classify_store_error(error),
            collection=collection,
            document=document,
        )

    def to_dict(self) -> Dict[str, Any]:
        error: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.collection:
            error["collection"] = self.collection
        if self.document:
            error["document"] = self.document
        return error

    def __repr__(self) -> str:
        return f"StoreError(code={self.code!r}, message={self.message!r})"


class PreviewTimeoutError(TimeoutError):
    """Raised when a stub repository in the loading state outlives its delay."""

    pass
