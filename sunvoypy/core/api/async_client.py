"""
Async HTTP client for the target application.

Every request is stamped with the cookie store's cookies and every
response (including each redirect hop) is captured back into it.
"""
import asyncio
from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from typing import Any, Collection, Dict, Mapping, Optional

import aiohttp
from multidict import CIMultiDict
from yarl import URL

from .config import APIConfig
from .errors import SunvoyAPIError
from ..exceptions import SunvoyNetworkError, SunvoyRequestError
from ..logging import get_logger
from ..session import CookieStore


REDIRECT_STATUSES = (301, 302, 303, 307, 308)


@dataclass
class HTTPResponse:
    """Fully read response; safe to use after the connection is released."""
    status: int
    url: URL
    headers: Mapping[str, str] = field(default_factory=CIMultiDict)
    text: str = ''
    cookies: SimpleCookie = field(default_factory=SimpleCookie)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def is_redirect(self) -> bool:
        return self.status in REDIRECT_STATUSES

    @property
    def location(self) -> Optional[str]:
        return self.headers.get('Location')


class AsyncAPIClient:
    """
    Asynchronous client bound to one origin and one cookie store.

    Features:
    - Configurable proxy, SSL, timeouts
    - Explicit cookie handling through CookieStore
    - Manual redirect following so no hop bypasses the cookie store

    Example:
        >>> async with AsyncAPIClient(config, cookie_store) as client:
        ...     response = await client.get('/settings/tokens')
    """

    def __init__(self, config: Optional[APIConfig] = None, cookies: Optional[CookieStore] = None):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
            cookies: Cookie store for the origin (must be created in a running loop
                     when not provided; one is built on first use)
        """
        self._config = config or APIConfig.default()
        self._cookies = cookies
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False
        self._logger = get_logger('sunvoypy.api')

    @property
    def config(self) -> APIConfig:
        """Get current configuration."""
        return self._config

    @property
    def cookies(self) -> CookieStore:
        if self._cookies is None:
            self._cookies = CookieStore(self._config.base_url)
        return self._cookies

    async def __aenter__(self) -> 'AsyncAPIClient':
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            # Cookies go through CookieStore, never through aiohttp's own jar
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                cookie_jar=aiohttp.DummyCookieJar(),
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
            self._connector = None

    def _build_url(self, path: str) -> URL:
        if path.startswith(('http://', 'https://')):
            return URL(path)
        return URL(self._config.url_for(path))

    async def request(
        self,
        method: str,
        path: str,
        *,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        allow_redirects: bool = True,
        expected_status: Optional[Collection[int]] = None
    ) -> HTTPResponse:
        """
        Send a request and read the whole response.

        Args:
            method: HTTP method
            path: Path on the origin (or absolute URL)
            data: Form dict or raw body
            headers: Extra request headers
            allow_redirects: Follow 3xx responses (up to config.max_redirects)
            expected_status: Accepted statuses; any 2xx when not given

        Returns:
            Final HTTPResponse

        Raises:
            SunvoyAPIError: Status not accepted
            SunvoyNetworkError: Connection failure or timeout
        """
        if self._closed:
            raise SunvoyRequestError("Client is closed")

        session = await self._ensure_session()
        url = self._build_url(path)
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
        hops = 0

        while True:
            request_headers = self.cookies.apply(url, headers)
            self._logger.debug(f"{method} {url}")

            try:
                async with session.request(
                    method,
                    url,
                    data=data,
                    headers=request_headers,
                    allow_redirects=False,
                    proxy=proxy
                ) as raw:
                    response = HTTPResponse(
                        status=raw.status,
                        url=raw.url,
                        headers=CIMultiDict(raw.headers),
                        text=await raw.text(errors='replace'),
                        cookies=raw.cookies,
                    )
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                self._logger.error(f"Network error on {method} {url}: {e!r}")
                raise SunvoyNetworkError(f"Network error: {e!r}") from e

            self.cookies.capture(response)
            self._logger.debug(f"{method} {url} -> {response.status}")

            if not (allow_redirects and response.is_redirect and response.location):
                break

            hops += 1
            if hops > self._config.max_redirects:
                raise SunvoyRequestError(f"Too many redirects from {path}")

            url = response.url.join(URL(response.location))
            if response.status == 303 or (response.status in (301, 302) and method != 'GET'):
                method, data = 'GET', None

        accepted = (
            response.status in expected_status
            if expected_status is not None
            else response.ok
        )
        if not accepted:
            raise SunvoyAPIError(response.status, str(response.url))

        return response

    async def get(self, path: str, **kwargs) -> HTTPResponse:
        return await self.request('GET', path, **kwargs)

    async def post(self, path: str, data: Any = None, **kwargs) -> HTTPResponse:
        return await self.request('POST', path, data=data, **kwargs)
