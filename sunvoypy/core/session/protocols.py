"""
Cookie storage protocols.

Defines the interface for cookie snapshot backends.
"""
from typing import List, Protocol, runtime_checkable

from .models import CookieRecord


@runtime_checkable
class CookieStorage(Protocol):
    """
    Protocol for cookie snapshot storage.

    Implementations can use a JSON file, memory, or any other backend.
    load() may raise on a missing or corrupt snapshot; CookieStore
    decides how to treat that.
    """

    def load(self) -> List[CookieRecord]:
        """
        Load the snapshot.

        Returns:
            Persisted cookies in snapshot order
        """
        ...

    def save(self, records: List[CookieRecord]) -> None:
        """
        Overwrite the snapshot.

        Args:
            records: Cookies to persist
        """
        ...

    def delete(self) -> None:
        """Delete the snapshot."""
        ...

    def exists(self) -> bool:
        """
        Check if a snapshot exists.

        Returns:
            True if a snapshot exists
        """
        ...

    def close(self) -> None:
        """Release resources."""
        ...
