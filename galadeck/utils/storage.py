"""
Local key/value persistence.
Each key is one JSON file under the data directory, written atomically.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..errors import StorageError

logger = logging.getLogger(__name__)


class LocalStorage:
    """A tiny key to JSON document store for a single device."""

    def __init__(self, base_dir: Path):
        """
        Initialize storage.

        Args:
            base_dir: Directory holding one ``<key>.json`` file per record
        """
        self.base_dir = Path(base_dir)

    def path_for(self, key: str) -> Path:
        """Return the file backing ``key``."""
        return self.base_dir / f"{key}.json"

    def get(self, key: str) -> Optional[Any]:
        """
        Read a record.

        Returns:
            The decoded JSON value, or None if the key was never written

        Raises:
            StorageError: if the file exists but cannot be read or decoded
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read '{key}': {e}") from e

    def set(self, key: str, value: Any) -> None:
        """
        Write a record, replacing any previous value.

        Raises:
            StorageError: if the value cannot be serialized or written
        """
        path = self.path_for(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump(value, f, indent=2, ensure_ascii=False)
                f.flush()
            tmp_path.replace(path)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Cannot write '{key}': {e}") from e

    def remove(self, key: str) -> None:
        """Delete a record if present."""
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Cannot remove '{key}': {e}") from e

    def clear(self) -> None:
        """Delete every record in this store."""
        if not self.base_dir.exists():
            return
        for path in self.base_dir.glob("*.json"):
            logger.info("Clearing stored record %s", path.name)
            self.remove(path.stem)
