"""Session manager: reuse a saved session or log in again."""
from enum import Enum
from typing import Optional

from ..async_auth import AsyncAuthService, AuthResult
from ..async_client import AsyncAPIClient
from ..config import Credentials
from ...exceptions import SunvoyRequestError
from ...logging import get_logger


class SessionState(Enum):
    """Where the manager is in establishing a session."""
    NO_SESSION = 'no_session'
    PROBING = 'probing'
    LOGGING_IN = 'logging_in'
    AUTHENTICATED = 'authenticated'


class SessionManager:
    """
    Establishes an authenticated session.

    Saved cookies are tried first: a probe request to a protected page
    decides whether they still work. Otherwise a fresh login is done and
    the new cookies are saved. A failed probe is not an error, it is what
    triggers the login.
    """

    def __init__(
        self,
        client: AsyncAPIClient,
        credentials: Credentials,
        auth: Optional[AsyncAuthService] = None
    ):
        """
        Initialize session manager.

        Args:
            client: API client whose cookie store holds the session
            credentials: Login credentials
            auth: Login handshake service
        """
        self._client = client
        self._credentials = credentials
        self._auth = auth or AsyncAuthService(client)
        self._state = SessionState.NO_SESSION
        self._logger = get_logger('sunvoypy.session')

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    async def ensure_session(self) -> AuthResult:
        """
        Make sure the client holds a valid session.

        Returns:
            AuthResult (reused=True when saved cookies were still valid)

        Raises:
            NonceMissingError: If the login page has no nonce
            SunvoyAuthError: If login fails after retries
            SunvoyRequestError: If the login page cannot be fetched
        """
        self._state = SessionState.NO_SESSION
        cookies = self._client.cookies

        if cookies.load():
            self._state = SessionState.PROBING
            if await self.probe():
                self._state = SessionState.AUTHENTICATED
                self._logger.info("Reused existing session")
                return AuthResult(reused=True, cookie_names=cookies.names())
            self._logger.info("Session expired, logging in again...")
            cookies.clear()

        self._state = SessionState.LOGGING_IN
        try:
            result = await self._auth.login(self._credentials)
        except BaseException:
            self._state = SessionState.NO_SESSION
            raise

        self._logger.debug(f"Cookies after login: {', '.join(result.cookie_names)}")
        cookies.save()
        self._state = SessionState.AUTHENTICATED
        return result

    async def probe(self) -> bool:
        """
        Check whether the current cookies are accepted.

        A redirect (typically to the login page) counts as rejection.
        """
        try:
            await self._client.get(
                self._client.config.endpoints.probe,
                allow_redirects=False
            )
        except SunvoyRequestError as e:
            self._logger.debug(f"Session probe failed: {e}")
            return False
        return True
