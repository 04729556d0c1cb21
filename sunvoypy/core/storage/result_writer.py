"""
Result file writer.

Writes the result bundle in one go: the JSON goes to a temporary file
next to the destination, which then replaces the destination.
"""
import os
from pathlib import Path
from typing import Union

import aiofiles

from ..exceptions import SunvoyOutputError
from ..extract import ResultBundle
from ..logging import get_logger


class ResultWriter:
    """
    Writes ResultBundle JSON files.

    Uses aiofiles for non-blocking I/O operations.
    """

    DEFAULT_PATH = Path('output') / 'users.json'

    def __init__(self, path: Union[str, Path, None] = None):
        self._path = Path(path) if path is not None else self.DEFAULT_PATH
        self._logger = get_logger('sunvoypy.output')

    @property
    def path(self) -> Path:
        return self._path

    async def write(self, bundle: ResultBundle) -> Path:
        """
        Write bundle to the destination.

        Returns:
            Destination path

        Raises:
            SunvoyOutputError: If the file cannot be written
        """
        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, 'w', encoding='utf-8') as f:
                await f.write(bundle.to_json())
            os.replace(tmp_path, self._path)
        except OSError as e:
            self._logger.error(f"Error saving to JSON: {e}")
            if tmp_path.exists():
                tmp_path.unlink()
            raise SunvoyOutputError(f"Could not write {self._path}: {e}", str(self._path)) from e

        self._logger.info(f"Data saved to {self._path}")
        return self._path
