"""HTTP status descriptions and the API error raised for unexpected statuses."""
from typing import Dict, Optional

from ...exceptions import SunvoyRequestError


class HTTPStatusCodes:
    """Status codes the target application is known to answer with."""

    STATUS_MESSAGES: Dict[int, str] = {
        301: 'Moved Permanently: the resource lives elsewhere now.',
        302: 'Found: usually a redirect to the login page when the session is gone.',
        303: 'See Other: follow-up must be fetched with GET.',
        400: 'Bad Request: the form or payload was rejected.',
        401: 'Unauthorized: the session cookie is missing or expired.',
        403: 'Forbidden: the nonce or origin check failed.',
        404: 'Not Found: the endpoint does not exist.',
        405: 'Method Not Allowed: wrong HTTP verb for this endpoint.',
        429: 'Too Many Requests: slow down and try again.',
        500: 'Internal Server Error',
        502: 'Bad Gateway',
        503: 'Service Unavailable: temporary outage, try again later.',
        504: 'Gateway Timeout',
    }

    @classmethod
    def get_message(cls, status: int) -> str:
        """Gets description for a status code."""
        return cls.STATUS_MESSAGES.get(status, f"Unexpected HTTP status {status}")


class SunvoyAPIError(SunvoyRequestError):
    """Exception raised when an endpoint answers with an unexpected status."""

    def __init__(self, status: int, url: Optional[str] = None):
        self.url = url
        self.message = f"HTTP {status}: {HTTPStatusCodes.get_message(status)}"
        if url:
            self.message = f"{self.message} ({url})"
        super().__init__(self.message, status)
