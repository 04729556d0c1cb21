"""
In-memory cookie storage implementation.

Provides non-persistent cookie storage for testing and one-off runs.
"""
from typing import List, Optional

from .protocols import CookieStorage
from .models import CookieRecord


class MemorySession(CookieStorage):
    """
    In-memory cookie storage.

    Stores the snapshot in memory only.
    Data is lost when the object is destroyed.

    Useful for:
    - Unit testing
    - Runs that must not reuse or leave a session behind

    Example:
        >>> storage = MemorySession()
        >>> storage.save(records)
        >>> loaded = storage.load()
    """

    def __init__(self, records: Optional[List[CookieRecord]] = None):
        """Initialize memory storage, optionally pre-seeded."""
        self._records: Optional[List[CookieRecord]] = (
            list(records) if records is not None else None
        )

    def load(self) -> List[CookieRecord]:
        """
        Load the snapshot from memory.

        Raises:
            FileNotFoundError: If nothing was saved yet
        """
        if self._records is None:
            raise FileNotFoundError("No cookie snapshot in memory")
        return list(self._records)

    def save(self, records: List[CookieRecord]) -> None:
        self._records = list(records)

    def delete(self) -> None:
        """Delete the snapshot from memory."""
        self._records = None

    def exists(self) -> bool:
        return self._records is not None

    def close(self) -> None:
        """Close storage (no-op for memory storage)."""
        pass

    def __enter__(self) -> 'MemorySession':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
