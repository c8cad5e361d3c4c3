"""
Error hierarchy for the notifier.

Every failure that aborts a run derives from NotifierError. No error
is recovered locally: the first one raised ends the reconciliation and
is reported by the process entrypoint.
"""

from datetime import datetime, timezone


class NotifierError(Exception):
    """Base exception for all notifier errors."""

    def __init__(
        self,
        message: str,
        *,
        service: str | None = None,
        endpoint: str | None = None,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.service = service
        self.endpoint = endpoint
        self.status_code = status_code
        self.original_error = original_error
        self.timestamp = datetime.now(timezone.utc)


class NetworkError(NotifierError):
    """Raised when a request could not be sent or no response arrived."""


class UnexpectedStatusError(NotifierError):
    """Raised when a response carries a status other than the expected one."""


class DecodeError(NotifierError):
    """Raised when a response body is malformed or has an unexpected shape."""


class DataIntegrityError(NotifierError):
    """Raised when a stored Notion row cannot be used for diffing."""
