"""Error taxonomy for word journey lookups.

Every failure is terminal: nothing is retried and the message is shown to the
user as-is.
"""

from typing import Optional


class JourneyError(Exception):
    """Base class for all lookup failures."""


class MissingCredentialError(JourneyError):
    """The selected backend needs an API key and none was given."""


class UpstreamError(JourneyError):
    """The backend answered with a non-success HTTP status or exit code."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class MalformedResponseError(JourneyError):
    """No parseable JSON object was found in the backend output."""


class BackendTimeoutError(JourneyError, TimeoutError):
    """The call exceeded its wall-clock timeout."""
