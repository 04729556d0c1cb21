"""API errors and exceptions."""
from .api_errors import SunvoyAPIError, HTTPStatusCodes

__all__ = [
    'SunvoyAPIError',
    'HTTPStatusCodes',
]
