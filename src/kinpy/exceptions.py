from enum import Enum
from typing import Optional

from .types import KinesisMetadata


class KinpyError(Exception):
    """Base exception for all kinpy errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class TransportError(KinpyError):
    """Raised when the HTTP round trip itself fails (connection, timeout, no session)."""


class CredentialsError(KinpyError):
    """Raised when no AWS credentials are available to sign a request."""


class ServiceError(KinpyError):
    """Raised when Kinesis answers a request with an error status.

    ``fault`` carries the operation's own enumeration member for ``code`` when
    the operation declares one (e.g. ``ListStreamsExceptions.LIMIT_EXCEEDED``),
    so callers can match on it instead of on strings.
    """

    def __init__(
        self,
        message: str,
        code: str = "Unknown",
        status: Optional[int] = None,
        metadata: Optional[KinesisMetadata] = None,
        fault: Optional[Enum] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(f"Kinesis error ({code}): {message}", original_error)
        self.code = code
        self.status = status
        self.metadata = metadata
        self.fault = fault

    @property
    def request_id(self) -> Optional[str]:
        return self.metadata.request_id if self.metadata else None


class MalformedResponseError(KinpyError):
    """Raised when a response body is missing a required field or has the wrong shape."""

    def __init__(
        self,
        message: str,
        body: Optional[bytes] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, original_error)
        self.body = body
