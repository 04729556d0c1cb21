"""
SunvoyClient - High-level async client for the Sunvoy challenge app.

Example:
    >>> async with SunvoyClient(".cookies.json") as sunvoy:
    ...     bundle = await sunvoy.run("output/users.json")
    ...     print(len(bundle.users))
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .core.api import (
    APIConfig,
    AsyncAPIClient,
    AsyncAuthService,
    AuthResult,
    Credentials,
    RetryExecutor,
    SessionManager,
)
from .core.exceptions import SunvoyException, SunvoyRequestError
from .core.extract import (
    CurrentUser,
    CurrentUserExtractor,
    NonceExtractor,
    ResultBundle,
    User,
    UserListExtractor,
)
from .core.logging import get_logger
from .core.session import CookieStorage, CookieStore, JSONSession, MemorySession
from .core.storage import ResultWriter


LIST_SCRIPT = re.compile(r'<script src="(/js/list\.[^"]+)"')


@dataclass
class ExecutionSummary:
    """What a run got through before finishing or failing."""
    login: bool = False
    session_reused: bool = False
    users_fetched: bool = False
    current_user_fetched: bool = False
    output_written: bool = False
    user_count: int = 0
    output_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.output_written and self.error is None


class SunvoyClient:
    """
    High-level async client with cookie session reuse.

    Supports two modes:

    1. Session file mode:
        >>> client = SunvoyClient(".cookies.json")
        >>> await client.start()  # reuses saved cookies or logs in
        >>> # cookies saved to .cookies.json

    2. Ephemeral mode (nothing read or written between runs):
        >>> async with SunvoyClient(credentials=Credentials("me@x.org", "pw")) as sunvoy:
        ...     users = await sunvoy.get_users()
    """

    def __init__(
        self,
        session: Optional[Union[str, Path, CookieStorage]] = None,
        credentials: Optional[Credentials] = None,
        *,
        config: Optional[APIConfig] = None,
        retry: Optional[RetryExecutor] = None,
        nonce_extractor: Optional[NonceExtractor] = None,
        base_path: Optional[Path] = None
    ):
        """
        Initialize client.

        Args:
            session: Cookie snapshot path, a CookieStorage, or None for memory only
            credentials: Login credentials (read from environment if not provided)
            config: Optional API configuration
            retry: Retry executor for login and data requests
            nonce_extractor: Nonce lookup strategy for the login page
            base_path: Base directory for a relative snapshot path
        """
        self._config = config or APIConfig.default()
        self._credentials = credentials or Credentials.from_env()
        self._retry = retry or RetryExecutor.from_config(self._config.retry)
        self._nonce_extractor = nonce_extractor
        self._logger = get_logger('sunvoypy.client')

        if session is None:
            self._storage: CookieStorage = MemorySession()
        elif isinstance(session, (str, Path)):
            self._storage = JSONSession(session, base_path)
        else:
            self._storage = session

        self._users_extractor = UserListExtractor()
        self._fields_extractor = CurrentUserExtractor()

        self._api: Optional[AsyncAPIClient] = None
        self._session_manager: Optional[SessionManager] = None
        self._auth_result: Optional[AuthResult] = None
        self.summary = ExecutionSummary()

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def storage(self) -> CookieStorage:
        return self._storage

    @property
    def cookies(self) -> Optional[CookieStore]:
        return self._api.cookies if self._api else None

    @property
    def auth_result(self) -> Optional[AuthResult]:
        return self._auth_result

    # =========================================================================
    # Connection management
    # =========================================================================

    async def connect(self) -> 'SunvoyClient':
        """Open the HTTP session. No request is sent yet."""
        if self._api is None:
            cookies = CookieStore(self._config.base_url, self._storage)
            self._api = AsyncAPIClient(self._config, cookies)
            await self._api.__aenter__()
            auth = AsyncAuthService(self._api, self._retry, self._nonce_extractor)
            self._session_manager = SessionManager(self._api, self._credentials, auth)
        return self

    async def start(self) -> 'SunvoyClient':
        """
        Connect and make sure a valid session exists.

        Returns:
            Self for chaining
        """
        await self.connect()
        await self.login()
        return self

    async def login(self) -> AuthResult:
        """Reuse the saved session or log in again."""
        await self.connect()
        self._auth_result = await self._session_manager.ensure_session()
        self.summary.login = True
        self.summary.session_reused = self._auth_result.reused
        return self._auth_result

    async def log_out(self) -> None:
        """Forget the session and delete the cookie snapshot."""
        if self._api is not None:
            self._api.cookies.delete()
        else:
            self._storage.delete()
        self._auth_result = None
        self._logger.info("Cookie snapshot deleted")

    async def close(self) -> None:
        """Close the HTTP session and the snapshot storage."""
        if self._api is not None:
            await self._api.close()
            self._api = None
            self._session_manager = None
        self._storage.close()

    async def __aenter__(self) -> 'SunvoyClient':
        return await self.connect()

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_logged_in(self) -> AsyncAPIClient:
        await self.connect()
        if not self._session_manager.is_authenticated:
            await self.login()
        return self._api

    # =========================================================================
    # Data
    # =========================================================================

    async def get_users(self) -> List[User]:
        """
        Fetch the user listing (first 10 entries).

        Raises:
            SunvoyRequestError: If no users could be fetched
        """
        api = await self._ensure_logged_in()
        self._logger.info("Fetching users...")

        async def fetch() -> List[User]:
            response = await api.post(self._config.endpoints.users)
            return self._users_extractor.extract_text(response.text)

        try:
            users = await self._retry.execute(fetch, description="users")
        except SunvoyException as e:
            self._logger.warning(f"POST {self._config.endpoints.users} failed: {e}")
            await self._diagnose_user_listing()
            raise SunvoyRequestError("Could not fetch users from any known endpoint") from e

        if not users:
            await self._diagnose_user_listing()
            raise SunvoyRequestError("Could not fetch users from any known endpoint")

        self._logger.info(f"Fetched {len(users)} users from {self._config.endpoints.users} (POST)")
        return users

    async def get_current_user(self) -> CurrentUser:
        """Fetch the settings page and read the current user's fields."""
        api = await self._ensure_logged_in()
        self._logger.info("Fetching current user...")

        async def fetch() -> CurrentUser:
            response = await api.get(self._config.endpoints.settings)
            return self._fields_extractor.extract(response.text)

        current_user = await self._retry.execute(fetch, description="settings")
        self._logger.info("Current user fetched successfully")
        return current_user

    async def collect(self) -> ResultBundle:
        """
        Run session, users and current-user steps in order.

        Returns:
            Assembled ResultBundle (not written)
        """
        await self.login()

        users = await self.get_users()
        self.summary.users_fetched = True
        self.summary.user_count = len(users)

        current_user = await self.get_current_user()
        self.summary.current_user_fetched = True

        return ResultBundle(users=users, current_user=current_user)

    async def run(self, output: Union[str, Path, None] = None) -> ResultBundle:
        """
        Execute the whole workflow and write the result file.

        Any failure aborts the remaining steps; nothing is written unless
        every step succeeded. self.summary records how far the run got.

        Args:
            output: Result file path (output/users.json by default)

        Returns:
            The written ResultBundle
        """
        self.summary = ExecutionSummary()
        writer = ResultWriter(output)
        try:
            bundle = await self.collect()
            self.summary.output_path = await writer.write(bundle)
            self.summary.output_written = True
        except Exception as e:
            self.summary.error = str(e)
            raise
        return bundle

    async def _diagnose_user_listing(self) -> None:
        """Log what the listing page serves, to help locate the users endpoint."""
        if not self._logger.isEnabledFor(logging.DEBUG):
            return

        probe = self._config.endpoints.probe
        try:
            page = await self._api.get(probe)
            self._logger.debug(f"First 2000 chars of {probe} HTML: {page.text[:2000]}")

            match = LIST_SCRIPT.search(page.text)
            if match:
                script = await self._api.get(match.group(1))
                self._logger.debug(f"First 2000 chars of {match.group(1)}: {script.text[:2000]}")
        except SunvoyRequestError as e:
            self._logger.debug(f"Error fetching {probe} or its script: {e}")
