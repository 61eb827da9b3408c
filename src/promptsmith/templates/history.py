"""Variable usage history stores for auto-suggestions."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from ..core.exceptions import StorageError
from ..storage import KeyValueStore

logger = logging.getLogger(__name__)

# Max history items to store per variable
MAX_HISTORY_ITEMS = 10


def push_recent(values: List[str], value: str, max_items: int = MAX_HISTORY_ITEMS) -> List[str]:
    """
    Put value at the front of values, dropping any earlier copy.

    Blank values leave the list unchanged.
    """
    if not value.strip():
        return list(values)
    return [value, *(v for v in values if v != value)][:max_items]


class HistoryStore(ABC):
    """
    Abstract store of recently used values per variable name.

    Values are kept most recent first, distinct, and capped at max_items.
    """

    def __init__(self, max_items: int = MAX_HISTORY_ITEMS):
        self.max_items = max_items

    @abstractmethod
    def get(self, name: str) -> List[str]:
        """Get the history for a variable (most recent first)."""
        pass

    @abstractmethod
    def record(self, name: str, value: str) -> None:
        """Record a use of value for the variable."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all history."""
        pass

    @abstractmethod
    def snapshot(self) -> Dict[str, List[str]]:
        """Get a copy of the full history."""
        pass

    @abstractmethod
    def load(self, history: Dict[str, List[str]]) -> None:
        """Replace the full history."""
        pass


class MemoryHistoryStore(HistoryStore):
    """In-memory history store."""

    def __init__(self, max_items: int = MAX_HISTORY_ITEMS):
        super().__init__(max_items)
        self._history: Dict[str, List[str]] = {}

    def get(self, name: str) -> List[str]:
        return list(self._history.get(name, []))

    def record(self, name: str, value: str) -> None:
        if not value.strip():
            return
        self._history[name] = push_recent(self._history.get(name, []), value, self.max_items)

    def clear(self) -> None:
        self._history.clear()

    def snapshot(self) -> Dict[str, List[str]]:
        return {name: list(values) for name, values in self._history.items()}

    def load(self, history: Dict[str, List[str]]) -> None:
        self._history = {
            name: list(values)[:self.max_items]
            for name, values in history.items()
        }


class KeyValueHistoryStore(HistoryStore):
    """
    History store persisted as a single JSON blob in a KeyValueStore.

    Unreadable data is treated as empty history and failed writes are
    logged, so recording usage never interrupts rendering.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = "variable-history",
        max_items: int = MAX_HISTORY_ITEMS
    ):
        super().__init__(max_items)
        self.store = store
        self.key = key

    def _read(self) -> Dict[str, List[str]]:
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            logger.warning("Failed to read variable history: %s", e)
            return {}
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt variable history under '%s'", self.key)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed variable history under '%s'", self.key)
            return {}
        return {
            name: [v for v in values if isinstance(v, str)]
            for name, values in data.items()
            if isinstance(values, list)
        }

    def _write(self, history: Dict[str, List[str]]) -> None:
        try:
            self.store.set(self.key, json.dumps(history))
        except StorageError as e:
            logger.warning("Failed to save variable history: %s", e)

    def get(self, name: str) -> List[str]:
        return self._read().get(name, [])

    def record(self, name: str, value: str) -> None:
        if not value.strip():
            return
        history = self._read()
        history[name] = push_recent(history.get(name, []), value, self.max_items)
        self._write(history)

    def clear(self) -> None:
        try:
            self.store.remove(self.key)
        except StorageError as e:
            logger.warning("Failed to clear variable history: %s", e)

    def snapshot(self) -> Dict[str, List[str]]:
        return self._read()

    def load(self, history: Dict[str, List[str]]) -> None:
        self._write({
            name: list(values)[:self.max_items]
            for name, values in history.items()
        })
