from typing import Any, Mapping, Optional


class ServiceValidationError(Exception):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers (400)
    """

    http_status = 400
    default_code = "SERVICE_VALIDATION_ERROR"

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class InvalidRangeError(ServiceValidationError):
    """Raised when a date range is absent, inverted, or too long."""

    default_code = "INVALID_RANGE"


class NotFoundError(Exception):
    """Raised when a requested resource was not found.

    Attributes are similar to ServiceValidationError. http_status is 404.
    """

    http_status = 404
    default_code = "NOT_FOUND"

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ConflictError(Exception):
    """Raised when a resource conflict occurs (e.g., duplicate entry).

    Attributes are similar to ServiceValidationError. http_status is 409.
    """

    http_status = 409
    default_code = "CONFLICT"

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class UnauthorizedError(Exception):
    """Raised when authentication or authorization fails.

    Attributes are similar to ServiceValidationError. http_status is 401.
    """

    http_status = 401
    default_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class UnauthenticatedError(UnauthorizedError):
    """Raised when there is no current user for a ledger operation."""

    default_code = "UNAUTHENTICATED"


class StoreError(Exception):
    """Raised when the ledger store rejects or fails an operation.

    Attributes are similar to ServiceValidationError. http_status is 502 because
    the failure happened in the backing store, not in the request itself.
    """

    http_status = 502
    default_code = "STORE_ERROR"

    def __init__(self, message: str = "Ledger store error", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class StoreUnavailableError(StoreError):
    """The ledger store could not be reached."""

    http_status = 503
    default_code = "STORE_UNAVAILABLE"


class FetchFailedError(StoreError):
    default_code = "FETCH_FAILED"


class InsertFailedError(StoreError):
    default_code = "INSERT_FAILED"


class DeleteFailedError(StoreError):
    default_code = "DELETE_FAILED"


class UpdateFailedError(StoreError):
    """Raised when a toggle could not be applied to the store.

    ``pending`` holds the rolled-back PendingToggle so callers can revert the
    optimistic flip they already showed.
    """

    default_code = "UPDATE_FAILED"

    def __init__(self, message: str = "Update failed", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None, pending=None):
        super().__init__(message, details=details, code=code)
        self.pending = pending
