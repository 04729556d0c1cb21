"""
JSON file cookie storage.

Persists the cookie snapshot as a JSON array of
{key, value, domain, path, expires} objects.
"""
import json
from pathlib import Path
from typing import List, Optional, Union

from .protocols import CookieStorage
from .models import CookieRecord


class JSONSession(CookieStorage):
    """
    JSON file based cookie storage.

    Example:
        >>> storage = JSONSession(".cookies.json")
        >>> storage.save(records)
        >>> storage.load()
    """

    DEFAULT_FILENAME = '.cookies.json'

    def __init__(
        self,
        path: Union[str, Path, None] = None,
        base_path: Optional[Path] = None
    ):
        """
        Initialize JSON storage.

        Args:
            path: Snapshot file path (defaults to .cookies.json)
            base_path: Optional directory for relative paths
        """
        self._path = Path(path) if path is not None else Path(self.DEFAULT_FILENAME)
        if base_path is not None and not self._path.is_absolute():
            self._path = base_path / self._path

    @property
    def path(self) -> Path:
        """Get snapshot file path."""
        return self._path

    def load(self) -> List[CookieRecord]:
        """
        Load cookies from the snapshot file.

        Raises:
            FileNotFoundError: If no snapshot exists
            ValueError: If the file is not a JSON array of cookie objects
        """
        data = json.loads(self._path.read_text(encoding='utf-8'))
        if not isinstance(data, list):
            raise ValueError(f"Cookie snapshot is not a list: {self._path}")

        try:
            return [CookieRecord.from_dict(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed cookie entry in {self._path}: {e}") from e

    def save(self, records: List[CookieRecord]) -> None:
        """Overwrite the snapshot file."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.to_dict() for record in records]
        self._path.write_text(json.dumps(payload, indent=2), encoding='utf-8')

    def delete(self) -> None:
        """Delete the snapshot file if present."""
        self._path.unlink(missing_ok=True)

    def exists(self) -> bool:
        return self._path.is_file()

    def close(self) -> None:
        """Nothing to release for plain files."""
        pass

    def __repr__(self) -> str:
        return f"JSONSession({str(self._path)!r})"
