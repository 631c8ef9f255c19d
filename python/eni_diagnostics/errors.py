"""
Error types raised by the ENI diagnostic collectors.
"""

from typing import Optional

class DiagnosticsError(Exception):
    """Base class for failures while gathering diagnostic data."""

    def __init__(self, message: str, resource_id: Optional[str] = None):
        super().__init__(message)
        self.resource_id = resource_id

class NotFoundError(DiagnosticsError):
    """The referenced resource does not exist in the region."""

class UnauthorizedError(DiagnosticsError):
    """The caller lacks permission for the lookup."""

class TransientError(DiagnosticsError):
    """A retryable network or service fault."""

class MalformedInputError(DiagnosticsError):
    """A collaborator returned data that could not be parsed."""

_NOT_FOUND_MARKERS = (
    ".NotFound",
    "ResourceNotFoundException",
    "does not exist",
)

_UNAUTHORIZED_MARKERS = (
    "AccessDenied",
    "UnauthorizedOperation",
    "not authorized",
    "ExpiredToken",
    "InvalidClientTokenId",
    "UnrecognizedClientException",
    "AuthFailure",
)

def classify_error(exc: BaseException, resource_id: Optional[str] = None) -> DiagnosticsError:
    """
    Maps a raw invoke or AWS CLI failure onto the diagnostic error taxonomy.

    Already classified errors are returned unchanged.

    Args:
        exc: The exception raised by the underlying call
        resource_id: Optional ID of the resource being looked up

    Returns:
        The matching DiagnosticsError subclass instance
    """
    if isinstance(exc, DiagnosticsError):
        return exc

    message = str(exc)
    if any(marker in message for marker in _NOT_FOUND_MARKERS):
        return NotFoundError(message, resource_id)
    if any(marker in message for marker in _UNAUTHORIZED_MARKERS):
        return UnauthorizedError(message, resource_id)
    return TransientError(message, resource_id)
