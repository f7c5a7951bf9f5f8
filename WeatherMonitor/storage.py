"""Key-value persistence for readings, keyed by city and calendar date."""
import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List, Optional

from weather_data import Reading


class StorageError(Exception):
    """Exception raised when the backing store cannot be read or written."""
    pass


class KeyValueStore(ABC):
    """Abstract string key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any existing one."""
        pass


class MemoryStore(KeyValueStore):
    """Dict-backed store that lives for the lifetime of the process."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    The file is loaded on first access and rewritten in full on every set.
    A missing file is treated as an empty store.
    """

    def __init__(self, path: str):
        """
        Args:
            path: Location of the JSON file
        """
        self.path = path
        self._data: Optional[Dict[str, str]] = None

    def _load(self) -> Dict[str, str]:
        if self._data is not None:
            return self._data

        if not os.path.exists(self.path):
            logging.debug(f"Store file {self.path} not found, starting empty")
            self._data = {}
            return self._data

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logging.error(f"Failed to read store file {self.path}: {e}")
            raise StorageError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Store file {self.path} does not contain a JSON object")

        self._data = data
        return self._data

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = dict(self._load())
        data[key] = value

        # write beside the store and swap in, so the live file is never half-written
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".weather-store-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logging.error(f"Failed to write store file {self.path}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Failed to write {self.path}: {e}") from e

        self._data = data


def reading_key(city: str, day: date) -> str:
    """Build the storage key for a city's readings on a given day."""
    return f"weather_{city}_{day.isoformat()}"


class ReadingStore:
    """
    Append-only reading logs on top of a key-value store.

    Writes are read-modify-write with no locking; a single active writer
    per store is assumed.
    """

    def __init__(self, store: KeyValueStore):
        self.store = store

    def append(self, city: str, reading: Reading) -> None:
        """Append a reading to the log for the city and the reading's date."""
        key = reading_key(city, reading.day)
        log = self._read(key)
        log.append(reading)
        self.store.set(key, json.dumps([r.to_dict() for r in log]))
        logging.debug(f"Stored reading under {key} ({len(log)} total)")

    def read_log(self, city: str, day: date) -> List[Reading]:
        """Return the readings for a city and date (empty if none)."""
        return self._read(reading_key(city, day))

    def _read(self, key: str) -> List[Reading]:
        raw = self.store.get(key)
        if raw is None:
            return []
        try:
            return [Reading.from_dict(item) for item in json.loads(raw)]
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Corrupt reading log under {key}: {e}")
            raise StorageError(f"Corrupt reading log under {key}: {e}") from e
