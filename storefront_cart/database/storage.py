"""Key/value storage media for persisted carts"""

import logging
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote

from ..core.config import Settings
from ..core.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Anything that can hold serialized carts by key"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStorage:
    """In-memory key/value storage"""

    def __init__(self):
        self.entries: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    def set(self, key: str, value: str) -> None:
        self.entries[key] = value

    def remove(self, key: str) -> None:
        self.entries.pop(key, None)


class FileStorage:
    """One JSON file per key under a directory"""

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        # Percent-encoding is reversible, so distinct keys never share a file
        return self.directory / f"{quote(key, safe='')}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    def remove(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to remove {path}: {e}") from e


def build_storage(settings: Settings) -> KeyValueStorage:
    """Storage medium selected by settings"""
    backend = settings.storage_backend.lower()
    if backend == "file":
        directory = settings.storage_dir or "data/carts"
        logger.info(f"Cart storage: files under {directory}")
        return FileStorage(directory)

    if backend != "memory":
        logger.warning(f"Unknown storage backend {backend!r}, using memory")
    return InMemoryStorage()
