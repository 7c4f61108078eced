"""Key-value blob storage the repository persists its snapshots to."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
from config.settings import DATA_DIR


class BlobStorage(ABC):
    """Keyed string blobs; each key holds one complete JSON document."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...


class InMemoryBlobStorage(BlobStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileBlobStorage(BlobStorage):
    """One `<key>.json` file per key inside a directory."""

    def __init__(self, directory=None):
        self.directory = Path(directory or DATA_DIR)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # temp file, then rename over the target
        tmp = self._path(key).with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(self._path(key))

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
