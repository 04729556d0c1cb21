"""
Custom exceptions for sunvoypy.

This module defines the exception hierarchy raised by the session,
extraction and output layers.
"""
from typing import Optional


class SunvoyException(Exception):
    """Base exception for all sunvoypy errors."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        super().__init__(message)


class SunvoyRequestError(SunvoyException):
    """Exception raised when a request cannot be completed."""
    pass


class SunvoyNetworkError(SunvoyRequestError):
    """Exception raised for connection failures and timeouts."""
    pass


class SunvoyAuthError(SunvoyException):
    """Exception raised for authentication-related errors."""
    pass


class NonceMissingError(SunvoyAuthError):
    """Raised when the login page carries no nonce field.

    The page layout is wrong rather than the network, so callers must not
    retry it.
    """

    def __init__(self, message: str = "Nonce not found on login page") -> None:
        super().__init__(message)


class SunvoyFormatError(SunvoyException):
    """Exception raised when a response body does not have the expected shape."""
    pass


class SunvoyConfigError(SunvoyException):
    """Exception raised for invalid configuration values."""

    def __init__(self, message: str, setting: Optional[str] = None) -> None:
        self.setting = setting
        super().__init__(message)


class SunvoyOutputError(SunvoyException):
    """Exception raised when the result file cannot be written."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            path: Destination that failed to be written
        """
        self.path = path
        super().__init__(message)
