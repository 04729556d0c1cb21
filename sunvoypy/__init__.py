"""
sunvoypy - Async client that logs into the Sunvoy challenge app and
exports its user list and the current user's token settings.

Usage:
    >>> from sunvoypy import SunvoyClient
    >>>
    >>> async with SunvoyClient(".cookies.json") as sunvoy:
    ...     bundle = await sunvoy.run("output/users.json")
"""
import logging
from .client import SunvoyClient, ExecutionSummary
from .core.logging import set_package_level

# Configuration
from .core.api import (
    APIConfig,
    Credentials,
    EndpointsConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncAPIClient,
    AsyncAuthService,
    SessionManager,
    RetryExecutor,
)

# Cookie sessions
from .core.session import (
    CookieStorage,
    CookieRecord,
    CookieStore,
    JSONSession,
    MemorySession,
)

# Records
from .core.extract import User, CurrentUser, ResultBundle

from .core.exceptions import (
    SunvoyException,
    SunvoyRequestError,
    SunvoyNetworkError,
    SunvoyAuthError,
    NonceMissingError,
    SunvoyFormatError,
    SunvoyConfigError,
    SunvoyOutputError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for sunvoypy modules.

    Sets the level on every sunvoypy logger and keeps propagation on so
    the root logger's handlers print them.

    Args:
        level: Logging level (default: logging.INFO)
    """
    set_package_level(level)


__all__ = [
    'SunvoyClient',
    'ExecutionSummary',
    'APIConfig',
    'Credentials',
    'EndpointsConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'SessionManager',
    'RetryExecutor',
    'CookieStorage',
    'CookieRecord',
    'CookieStore',
    'JSONSession',
    'MemorySession',
    'User',
    'CurrentUser',
    'ResultBundle',
    'SunvoyException',
    'SunvoyRequestError',
    'SunvoyNetworkError',
    'SunvoyAuthError',
    'NonceMissingError',
    'SunvoyFormatError',
    'SunvoyConfigError',
    'SunvoyOutputError',
    'setup_logging',
]
