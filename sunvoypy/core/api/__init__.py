"""HTTP access to the target application: transport, login, session and retries."""
from .errors import SunvoyAPIError, HTTPStatusCodes
from .config import (
    APIConfig,
    Credentials,
    EndpointsConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig
)
from .retry import RetryStrategy, LinearBackoffStrategy, RetryExecutor
from .async_client import AsyncAPIClient, HTTPResponse
from .async_auth import AsyncAuthService, AuthResult
from .session import SessionManager, SessionState

__all__ = [
    # Client
    'AsyncAPIClient',
    'HTTPResponse',

    # Authentication
    'AsyncAuthService',
    'AuthResult',
    'SessionManager',
    'SessionState',

    # Retry
    'RetryStrategy',
    'LinearBackoffStrategy',
    'RetryExecutor',

    # Configuration
    'APIConfig',
    'Credentials',
    'EndpointsConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',

    # Errors
    'SunvoyAPIError',
    'HTTPStatusCodes',
]
