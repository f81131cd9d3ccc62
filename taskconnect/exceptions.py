"""Errors raised by the application lifecycle operations."""


class LifecycleError(Exception):
    """Base class for every outcome a lifecycle operation can fail with."""

    kind = "LifecycleError"
    default_message = "Request could not be completed"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class AccessDenied(LifecycleError):
    kind = "AccessDenied"
    default_message = "Access denied"


class NotFound(LifecycleError):
    kind = "NotFound"
    default_message = "Resource not found"


class AlreadyApplied(LifecycleError):
    kind = "AlreadyApplied"
    default_message = "You have already applied for this job"


class InvalidTransition(LifecycleError):
    """The application has already been accepted or rejected."""

    kind = "InvalidTransition"
    default_message = "Application has already been decided"


class DuplicateAccount(LifecycleError):
    kind = "DuplicateAccount"
    default_message = "Email already registered"


class PersistenceError(LifecycleError):
    """The store failed. The driver's error is chained as ``__cause__``."""

    kind = "PersistenceError"
    default_message = "Database error"
