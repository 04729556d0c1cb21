"""
API configuration module.

Provides the configuration for the Sunvoy HTTP client: target origin,
endpoints, transport options and the retry policy.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping
import os
import ssl

from yarl import URL

from ..exceptions import SunvoyConfigError


DEFAULT_BASE_URL = 'https://challenge.sunvoy.com'
DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36'
)


def _env_number(env: Mapping[str, str], name: str, kind: type):
    """Parse a non-negative number from the environment."""
    raw = env[name]
    try:
        value = kind(raw)
    except ValueError as e:
        raise SunvoyConfigError(f"{name} must be a number, got {raw!r}", name) from e
    if value < 0:
        raise SunvoyConfigError(f"{name} must not be negative, got {raw!r}", name)
    return value


@dataclass(frozen=True)
class Credentials:
    """Login credentials. Supplied once at start, never persisted."""
    username: str
    password: str = field(repr=False)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Credentials':
        """
        Read credentials from SUNVOY_USERNAME / SUNVOY_PASSWORD.

        Falls back to the public demo account when unset.
        """
        env = os.environ if environ is None else environ
        return cls(
            username=env.get('SUNVOY_USERNAME', 'demo@example.org'),
            password=env.get('SUNVOY_PASSWORD', 'test'),
        )


@dataclass
class ProxyConfig:
    """HTTP(S) proxy, optionally with basic auth credentials."""
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    def to_aiohttp_proxy(self) -> Optional[str]:
        """Proxy URL as aiohttp expects it, credentials embedded."""
        if not self.url:
            return None

        proxy = URL(self.url)
        if self.username and self.password:
            proxy = proxy.with_user(self.username).with_password(self.password)
        return str(proxy)


@dataclass
class SSLConfig:
    """SSL/TLS configuration."""
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Any:
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context(cafile=self.ca_file)
        context.check_hostname = self.check_hostname
        return context


@dataclass
class TimeoutConfig:
    """
    Per-request timeout configuration.

    There is no budget across the whole run, only per HTTP call.
    """
    total: float = 30.0
    connect: float = 10.0
    sock_read: float = 20.0

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class RetryConfig:
    """
    Retry configuration.

    Linear backoff: the wait before attempt i+1 is base_delay * i.
    """
    max_attempts: int = 3
    base_delay: float = 1.0


@dataclass
class EndpointsConfig:
    """Paths of the endpoints used by the workflow."""
    login: str = '/login'
    probe: str = '/list'
    users: str = '/api/users'
    settings: str = '/settings/tokens'


@dataclass
class APIConfig:
    """
    Complete client configuration.

    Centralizes all configuration options for the Sunvoy client.
    """
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    accept: str = 'application/json, text/html, */*'
    max_redirects: int = 10

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    endpoints: EndpointsConfig = field(default_factory=EndpointsConfig)

    extra_headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.base_url = self.base_url.rstrip('/')

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'APIConfig':
        """
        Create configuration from SUNVOY_* environment variables.

        Recognized: SUNVOY_BASE_URL, SUNVOY_PROXY, SUNVOY_TIMEOUT,
        SUNVOY_MAX_ATTEMPTS, SUNVOY_RETRY_DELAY, SUNVOY_VERIFY_SSL.

        Raises:
            SunvoyConfigError: If a numeric variable is not a non-negative number
        """
        env = os.environ if environ is None else environ
        config = cls(base_url=env.get('SUNVOY_BASE_URL', DEFAULT_BASE_URL))

        if env.get('SUNVOY_PROXY'):
            config.proxy = ProxyConfig(url=env['SUNVOY_PROXY'])
        if env.get('SUNVOY_TIMEOUT'):
            config.timeout = TimeoutConfig(total=_env_number(env, 'SUNVOY_TIMEOUT', float))
        if env.get('SUNVOY_MAX_ATTEMPTS'):
            config.retry.max_attempts = _env_number(env, 'SUNVOY_MAX_ATTEMPTS', int)
        if env.get('SUNVOY_RETRY_DELAY'):
            config.retry.base_delay = _env_number(env, 'SUNVOY_RETRY_DELAY', float)
        if env.get('SUNVOY_VERIFY_SSL', '').lower() in ('0', 'false', 'no'):
            config.ssl = SSLConfig(verify=False, check_hostname=False)

        return config

    def url_for(self, path: str) -> str:
        """Build an absolute URL on the target origin."""
        return f"{self.base_url}{path}"

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit_per_host': 1,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        headers = {
            'User-Agent': self.user_agent,
            'Accept': self.accept,
            **self.extra_headers
        }

        return {
            'headers': headers,
            'timeout': self.timeout.to_aiohttp_timeout(),
        }
