"""Key-value storage backends for user data and variable history."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from ..core.config import StorageSettings, get_settings
from ..core.exceptions import StorageError, ConfigurationError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """
    Abstract key-value store holding serialized JSON strings.

    Callers own serialization; the store only moves strings.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get the value stored under key, or None."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store value under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Remove key. Returns True if something was removed."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List stored keys."""
        pass


class MemoryKeyValueStore(KeyValueStore):
    """In-memory key-value store for testing and ephemeral use."""

    def __init__(self):
        self._storage: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._storage.get(key)

    def set(self, key: str, value: str) -> None:
        self._storage[key] = value

    def remove(self, key: str) -> bool:
        if key in self._storage:
            del self._storage[key]
            return True
        return False

    def keys(self) -> List[str]:
        return list(self._storage.keys())


class FileKeyValueStore(KeyValueStore):
    """File-based key-value store, one JSON file per key."""

    def __init__(self, storage_dir: str):
        self.storage_dir = Path(storage_dir)
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(
                f"Cannot create storage directory: {storage_dir}",
                cause=e
            )

    def _get_path(self, key: str) -> Path:
        """Get file path for a key."""
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self.storage_dir / f"{safe_key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._get_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read '{key}'", key=key, cause=e)

    def set(self, key: str, value: str) -> None:
        path = self._get_path(key)
        try:
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write '{key}'", key=key, cause=e)
        logger.debug("Stored key %s at %s", key, path)

    def remove(self, key: str) -> bool:
        path = self._get_path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to remove '{key}'", key=key, cause=e)
        logger.debug("Removed key %s", key)
        return True

    def keys(self) -> List[str]:
        return [p.stem for p in self.storage_dir.glob("*.json")]


def create_store(settings: Optional[StorageSettings] = None) -> KeyValueStore:
    """
    Create the key-value store selected by configuration.

    Args:
        settings: Storage settings (defaults to the global settings)

    Returns:
        KeyValueStore instance

    Raises:
        ConfigurationError: If the backend name is unknown
    """
    settings = settings or get_settings().storage

    if settings.backend == "memory":
        return MemoryKeyValueStore()
    if settings.backend == "file":
        return FileKeyValueStore(settings.path)

    raise ConfigurationError(
        f"Unknown storage backend: {settings.backend}",
        config_key="PS_STORAGE_BACKEND"
    )
