"""
Cookie snapshot models.

Contains the data class persisted for each session cookie.
"""
from dataclasses import dataclass
from http.cookies import Morsel
from typing import Optional


@dataclass
class CookieRecord:
    """
    One persisted session cookie.

    Attributes:
        key: Cookie name
        value: Cookie value
        domain: Domain the cookie is scoped to
        path: Path the cookie is scoped to
        expires: Expiry date as sent by the server, None for session cookies
    """
    key: str
    value: str
    domain: str = ''
    path: str = '/'
    expires: Optional[str] = None

    def __post_init__(self):
        for name in ('domain', 'path'):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"Cookie {self.key!r}: {name} must be a string")
        if self.expires is not None and not isinstance(self.expires, str):
            raise ValueError(f"Cookie {self.key!r}: expires must be a date string")

    def to_dict(self) -> dict:
        """
        Convert to dictionary for serialization.

        Returns:
            Dictionary representation
        """
        return {
            'key': self.key,
            'value': self.value,
            'domain': self.domain,
            'path': self.path,
            'expires': self.expires,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CookieRecord':
        """
        Create from dictionary.

        Args:
            data: Dictionary with at least 'key' and 'value'

        Returns:
            CookieRecord instance

        Raises:
            KeyError: If key or value is missing
            ValueError: If domain, path or expires is not a string
        """
        return cls(
            key=str(data['key']),
            value=str(data['value']),
            domain=data.get('domain') or '',
            path=data.get('path') or '/',
            expires=data.get('expires') or None,
        )

    @classmethod
    def from_morsel(cls, morsel: Morsel) -> 'CookieRecord':
        """Create from a cookie jar morsel."""
        return cls(
            key=morsel.key,
            value=morsel.value,
            domain=morsel['domain'] or '',
            path=morsel['path'] or '/',
            expires=morsel['expires'] or None,
        )
