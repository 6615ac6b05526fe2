import copy
import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from shiptrack.store.ids import coerce_id
from shiptrack.utils.timestamps import now_iso

logger = logging.getLogger(__name__)

Record = Dict[str, Any]


class Collection(ABC):
    """A named list of records addressable by integer id.

    Every operation reads the whole collection, mutates it and writes it back.
    ``lock`` is re-entrant: a caller that needs several operations to behave as
    one read-modify-write cycle holds it around them.
    """

    def __init__(self, name: str):
        self.name = name
        self.lock = threading.RLock()

    @abstractmethod
    def _load(self) -> List[Record]:
        ...

    @abstractmethod
    def _dump(self, items: List[Record]) -> None:
        ...

    def find_all(self) -> List[Record]:
        with self.lock:
            return self._load()

    def find_by_id(self, record_id: Any) -> Optional[Record]:
        wanted = coerce_id(record_id)
        if wanted is None:
            return None
        with self.lock:
            return next((it for it in self._load() if coerce_id(it.get("id")) == wanted), None)

    def create(self, data: Record) -> Record:
        with self.lock:
            items = self._load()
            new_id = max((coerce_id(it.get("id")) or 0 for it in items), default=0) + 1
            stamp = now_iso()
            item = {**data, "id": new_id, "createdAt": stamp, "updatedAt": stamp}
            items.append(item)
            self._dump(items)
            return item

    def update(self, record_id: Any, updates: Record) -> Optional[Record]:
        wanted = coerce_id(record_id)
        if wanted is None:
            return None
        with self.lock:
            items = self._load()
            for idx, it in enumerate(items):
                if coerce_id(it.get("id")) == wanted:
                    changes = {k: v for k, v in updates.items() if k != "id"}
                    items[idx] = {**it, **changes, "updatedAt": now_iso()}
                    self._dump(items)
                    return items[idx]
            return None

    def delete(self, record_id: Any) -> bool:
        wanted = coerce_id(record_id)
        if wanted is None:
            return False
        with self.lock:
            items = self._load()
            kept = [it for it in items if coerce_id(it.get("id")) != wanted]
            if len(kept) == len(items):
                return False
            self._dump(kept)
            return True


class JsonFileCollection(Collection):
    """Collection persisted as a pretty-printed JSON array in one file."""

    def __init__(self, name: str, path: Path):
        super().__init__(name)
        self.path = Path(path)

    def _load(self) -> List[Record]:
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def _dump(self, items: List[Record]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            json.dump(items, fh, indent=2)


class MemoryCollection(Collection):
    def __init__(self, name: str, items: Optional[List[Record]] = None):
        super().__init__(name)
        self._items: List[Record] = copy.deepcopy(items or [])

    def _load(self) -> List[Record]:
        # Callers get copies so they cannot mutate stored state behind our back.
        return copy.deepcopy(self._items)

    def _dump(self, items: List[Record]) -> None:
        self._items = copy.deepcopy(items)


class RecordStore:
    """Named collections (``users``, ``shipments``, ``notifications``)."""

    def __init__(self, factory: Callable[[str], Collection]):
        self._factory = factory
        self._collections: Dict[str, Collection] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_directory(cls, data_dir) -> "RecordStore":
        base = Path(data_dir)
        logger.info("Using JSON record store at %s", base.resolve())
        return cls(lambda name: JsonFileCollection(name, base / f"{name}.json"))

    @classmethod
    def in_memory(cls) -> "RecordStore":
        return cls(MemoryCollection)

    def collection(self, name: str) -> Collection:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = self._factory(name)
            return self._collections[name]

    @property
    def users(self) -> Collection:
        return self.collection("users")

    @property
    def shipments(self) -> Collection:
        return self.collection("shipments")

    @property
    def notifications(self) -> Collection:
        return self.collection("notifications")
