"""
Error taxonomy shared by the server and the client layer.

Every storage failure is mapped onto one of these before it reaches an HTTP
response, so handlers never leak driver exceptions.
"""

from fastapi import status


class BraindumpError(Exception):
    """Base exception; carries the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BraindumpError):
    """Missing or malformed input. Not retried, not logged as an incident."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ServiceUnavailable(BraindumpError):
    """Storage disconnected or connection acquisition timed out. Retryable."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Database temporarily unavailable"


class InternalError(BraindumpError):
    """Unexpected query failure. Logged, never retried by the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


class TransportError(BraindumpError):
    """Client-observed network failure or timeout. Retryable."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Network error"
