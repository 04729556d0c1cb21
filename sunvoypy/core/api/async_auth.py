"""
Async authentication service.

Performs the nonce-based login handshake against the target application.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .async_client import AsyncAPIClient, HTTPResponse
from .config import Credentials
from .retry import RetryExecutor
from ..exceptions import NonceMissingError, SunvoyAuthError
from ..extract import NonceExtractor, RegexNonceExtractor
from ..logging import get_logger


LOGIN_SUCCESS_STATUSES = (200, 302)


@dataclass
class AuthResult:
    """Outcome of establishing a session."""
    reused: bool
    redirect_location: Optional[str] = None
    cookie_names: List[str] = field(default_factory=list)


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Fetches a fresh nonce from the login page, then posts the credentials.
    Only the POST goes through the retry executor: a page without a nonce
    will not grow one on a second try.
    """

    def __init__(
        self,
        client: AsyncAPIClient,
        retry: Optional[RetryExecutor] = None,
        nonce_extractor: Optional[NonceExtractor] = None
    ):
        """
        Initialize auth service.

        Args:
            client: Async API client
            retry: Executor for the credential POST
            nonce_extractor: Nonce lookup strategy (pattern based by default)
        """
        self._client = client
        self._retry = retry or RetryExecutor.from_config(client.config.retry)
        self._nonce_extractor = nonce_extractor or RegexNonceExtractor()
        self._logger = get_logger('sunvoypy.auth')

    async def fetch_nonce(self) -> str:
        """
        Fetch the login page and extract its nonce.

        Raises:
            NonceMissingError: If the page has no nonce field
        """
        self._logger.info("Fetching login page for nonce...")
        page = await self._client.get(
            self._client.config.endpoints.login,
            headers={'Accept': 'text/html'}
        )
        nonce = self._nonce_extractor.extract(page.text)
        if not nonce:
            self._logger.debug(f"First 500 chars of login page HTML: {page.text[:500]}")
            raise NonceMissingError()
        self._logger.debug("Nonce extracted")
        return nonce

    async def login(self, credentials: Credentials) -> AuthResult:
        """
        Log in with credentials.

        Args:
            credentials: Username and password

        Returns:
            AuthResult with the login redirect target

        Raises:
            NonceMissingError: If the login page has no nonce
            SunvoyAuthError: If the credential POST keeps failing
        """
        config = self._client.config
        nonce = await self.fetch_nonce()
        form = {
            'username': credentials.username,
            'password': credentials.password,
            'nonce': nonce,
        }
        headers = {
            'Content-Type': 'application/x-www-form-urlencoded',
            'Referer': config.url_for(config.endpoints.login),
            'Origin': config.base_url,
        }

        async def post_credentials() -> HTTPResponse:
            response = await self._client.post(
                config.endpoints.login,
                data=form,
                headers=headers,
                allow_redirects=False,
                expected_status=range(100, 600)
            )
            if response.status not in LOGIN_SUCCESS_STATUSES:
                raise SunvoyAuthError(f"Login failed: HTTP {response.status}", response.status)
            return response

        self._logger.info("Attempting to login...")
        response = await self._retry.execute(post_credentials, description="login")

        location = response.location if response.status == 302 else None
        self._logger.info("Login successful")
        if location:
            self._logger.debug(f"Login redirect location: {location}")

        return AuthResult(
            reused=False,
            redirect_location=location,
            cookie_names=self._client.cookies.names()
        )
