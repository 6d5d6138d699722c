"""Exception classes for social proof notifications.

Collaborators (stores, transports) raise these; the best-effort policy in
``socialproof.policy`` is the only place they are turned into fallbacks.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class SocialProofError(Exception):
    """Base class for all recoverable notification errors."""


class PersistenceUnavailable(SocialProofError):
    """Raised when the key-value store cannot be read or written."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize with store error details.

        Args:
            message: Description of the storage failure
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error


class MalformedPersistedRecord(SocialProofError):
    """Raised when the stored last-shown value is not an ISO-8601 timestamp."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Unparseable last-shown record: {raw!r}")
        self.raw = raw


class TransportFailure(SocialProofError):
    """Error while fetching or decoding remote notification content.

    Includes the HTTP status code when one was received (0 otherwise).
    """

    def __init__(
        self, code: int, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 when no response was received
            message: Human-readable error message
            original_error: The original exception that was caught
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.original_error = original_error


class NetworkError(TransportFailure):
    """Raised when the endpoint could not be reached or answered non-200."""

    @classmethod
    def from_status(cls, status_code: int, url: str) -> NetworkError:
        return cls(status_code, f"Unexpected HTTP status from {url}")


class ParseError(TransportFailure):
    """Raised when a response body is not a valid notification payload."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message, original_error)


class AdmissionReason(Enum):
    """Why a show request was turned away."""

    ALREADY_VISIBLE = "already visible"
    MAX_REACHED = "maximum notifications reached"


class AdmissionRejected(SocialProofError):
    """Raised internally when a show request fails an admission check.

    Never escapes the controller: ``show`` treats it as a silent no-op.
    """

    def __init__(self, reason: AdmissionReason) -> None:
        super().__init__(reason.value)
        self.reason = reason
