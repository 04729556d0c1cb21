"""
Cookie store for the target origin.

Wraps an aiohttp CookieJar and a CookieStorage backend. Requests are
stamped with apply(), responses are merged back with capture(), and the
jar contents can be loaded from / saved to a snapshot.
"""
from http.cookies import CookieError, SimpleCookie
from typing import Dict, List, Optional, Union

import aiohttp
from yarl import URL

from ..logging import get_logger
from .models import CookieRecord
from .protocols import CookieStorage
from .memory_session import MemorySession


class CookieStore:
    """
    Session cookies for a single origin.

    The jar keeps one cookie per (name, domain, path); a later Set-Cookie
    for the same triple replaces the earlier one. Must be created while an
    event loop is running (aiohttp requirement).

    Example:
        >>> store = CookieStore("https://challenge.sunvoy.com", JSONSession())
        >>> if not store.load():
        ...     ...  # log in, then
        >>> store.save()
    """

    def __init__(
        self,
        origin: Union[str, URL],
        storage: Optional[CookieStorage] = None
    ):
        """
        Initialize cookie store.

        Args:
            origin: Target origin, e.g. https://challenge.sunvoy.com
            storage: Snapshot backend (in-memory if not provided)
        """
        self._origin = URL(str(origin))
        self._storage = storage if storage is not None else MemorySession()
        # unsafe: the origin may be a bare IP address
        self._jar = aiohttp.CookieJar(unsafe=True)
        self._logger = get_logger('sunvoypy.cookies')

    @property
    def origin(self) -> URL:
        return self._origin

    @property
    def storage(self) -> CookieStorage:
        return self._storage

    @property
    def jar(self) -> aiohttp.CookieJar:
        return self._jar

    def __len__(self) -> int:
        return len(self._records_for_origin())

    def names(self) -> List[str]:
        """Names of the cookies visible to the origin (values are never exposed)."""
        return [record.key for record in self._records_for_origin()]

    def load(self) -> bool:
        """
        Populate the jar from the snapshot.

        Returns:
            True if at least one cookie for the origin was loaded. A missing
            or malformed snapshot yields False.
        """
        try:
            records = self._storage.load()
        except FileNotFoundError:
            self._logger.debug("No cookie snapshot found")
            return False
        except (OSError, ValueError) as e:
            self._logger.warning(f"Error loading cookies: {e}")
            return False

        for record in records:
            try:
                self._jar.update_cookies(self._to_cookie(record), self._origin)
            except (CookieError, TypeError, ValueError) as e:
                self._logger.warning(f"Skipping cookie {record.key!r}: {e}")

        loaded = len(self) > 0
        if loaded:
            self._logger.info(f"Cookies loaded from {self._storage!r}")
        return loaded

    def save(self) -> None:
        """
        Write the cookies visible to the origin to the snapshot.

        A failed write is logged; the current run does not depend on it.
        """
        records = self._records_for_origin()
        try:
            self._storage.save(records)
        except (OSError, TypeError, ValueError) as e:
            self._logger.error(f"Error saving cookies: {e}")
            return
        self._logger.info(f"Cookies saved to {self._storage!r}")

    def delete(self) -> None:
        """Forget all cookies and remove the snapshot."""
        self._jar.clear()
        self._storage.delete()

    def clear(self) -> None:
        """Forget all in-memory cookies; the snapshot is left alone."""
        self._jar.clear()

    def apply(self, url: Union[str, URL], headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Stamp request headers with the cookies matching url.

        Args:
            url: Request URL
            headers: Headers to extend (not modified)

        Returns:
            New header dict, with a Cookie header when any cookie matches
        """
        result = dict(headers or {})
        matched = self._jar.filter_cookies(URL(str(url)))
        if matched:
            result['Cookie'] = '; '.join(
                f"{name}={morsel.coded_value}" for name, morsel in matched.items()
            )
        return result

    def capture(self, response) -> None:
        """
        Merge a response's Set-Cookie entries into the jar.

        Args:
            response: Anything with .cookies (SimpleCookie) and .url
        """
        cookies = getattr(response, 'cookies', None)
        if cookies:
            self._jar.update_cookies(cookies, URL(str(response.url)))

    def _records_for_origin(self) -> List[CookieRecord]:
        visible = self._jar.filter_cookies(self._origin)
        return [
            CookieRecord.from_morsel(morsel)
            for morsel in self._jar
            if morsel.key in visible
        ]

    def _to_cookie(self, record: CookieRecord) -> SimpleCookie:
        cookie = SimpleCookie()
        cookie[record.key] = record.value
        morsel = cookie[record.key]
        morsel['path'] = record.path or '/'
        # Host-only cookies keep an empty domain so the jar scopes them to the origin host
        host = self._origin.raw_host or ''
        if record.domain and record.domain.lstrip('.') != host:
            morsel['domain'] = record.domain
        if record.expires:
            morsel['expires'] = record.expires
        return cookie
