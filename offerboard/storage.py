"""Flat key-value stores backing the marketplace state.

Values are JSON text. Every write replaces the whole value for a key, so a
blob is either fully written or not written at all.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from offerboard.errors import PersistenceUnavailable

logger = logging.getLogger(__name__)

T = TypeVar("T")

KV_COLLECTION = "kv"


class KeyValueStore:
    """Interface shared by the in-memory and MongoDB stores."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> Iterator[str]:
        raise NotImplementedError

    def clear(self) -> int:
        """Delete every key and return how many were removed."""
        removed = 0
        for key in list(self.keys()):
            self.delete(key)
            removed += 1
        return removed

    def load_json(self, key: str, default: Any) -> Any:
        """Return the decoded value for ``key``, or ``default`` when absent or unreadable."""
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable value stored under %r", key)
            return default

    def load_records(self, key: str, from_dict: Callable[[Any], T]) -> List[T]:
        """Decode a stored list, skipping any element that is not a valid record."""
        raw = self.load_json(key, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring malformed list stored under %r", key)
            return []
        records: List[T] = []
        for index, item in enumerate(raw):
            try:
                records.append(from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed record %d under %r: %r", index, key, e)
        return records

    def save_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value, separators=(",", ":")))


class MemoryKeyValueStore(KeyValueStore):
    """Process-local store, used by default and in tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))


class MongoKeyValueStore(KeyValueStore):
    """Store keeping one document per key: ``{"_id": key, "value": text}``."""

    def __init__(self, collection: Collection):
        self._collection = collection

    def get(self, key: str) -> Optional[str]:
        try:
            document = self._collection.find_one({"_id": key})
        except PyMongoError as e:
            logger.error("Failed to read %r from MongoDB: %s", key, e)
            raise PersistenceUnavailable() from e
        if document is None:
            return None
        return document.get("value")

    def set(self, key: str, value: str) -> None:
        try:
            self._collection.replace_one({"_id": key}, {"_id": key, "value": value}, upsert=True)
        except PyMongoError as e:
            logger.error("Failed to write %r to MongoDB: %s", key, e)
            raise PersistenceUnavailable() from e

    def delete(self, key: str) -> None:
        try:
            self._collection.delete_one({"_id": key})
        except PyMongoError as e:
            logger.error("Failed to delete %r from MongoDB: %s", key, e)
            raise PersistenceUnavailable() from e

    def keys(self) -> Iterator[str]:
        try:
            return iter([doc["_id"] for doc in self._collection.find({}, {"_id": 1})])
        except PyMongoError as e:
            logger.error("Failed to list keys from MongoDB: %s", e)
            raise PersistenceUnavailable() from e

    def clear(self) -> int:
        try:
            return self._collection.delete_many({}).deleted_count
        except PyMongoError as e:
            logger.error("Failed to clear MongoDB key-value store: %s", e)
            raise PersistenceUnavailable() from e
