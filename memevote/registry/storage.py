"""
Key-Value Storage Module

The registry keeps its state in a durable key-value store. This module
defines the interface the registry relies on and an in-memory
implementation used by default and in tests.

Any object offering the same five methods can be passed to Registry in
place of InMemoryStorage; persistence mechanics belong to that object.
"""

from typing import Any, Dict, Hashable, Optional


class Storage:
    """
    Interface of the key-value store assumed by the registry.

    Keys are hashable values (ints for records, (identity, id) tuples for
    the vote ledger). Values are stored and returned as-is.
    """

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the value stored under key, or None."""
        raise NotImplementedError

    def put(self, key: Hashable, value: Any) -> None:
        """Insert or overwrite the value stored under key."""
        raise NotImplementedError

    def exists(self, key: Hashable) -> bool:
        """Check whether key holds a value."""
        raise NotImplementedError

    def size(self) -> int:
        """Number of keys currently stored."""
        raise NotImplementedError

    def clear(self) -> None:
        """Remove every key."""
        raise NotImplementedError


class InMemoryStorage(Storage):
    """
    Dict-backed storage.

    Provides O(1) average-case time complexity for get, put and exists.
    Nothing is ever evicted or expired: the registry never deletes, and
    losing a key would break its invariants.
    """

    def __init__(self):
        self._data: Dict[Hashable, Any] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up

        Returns:
            The stored value, or None if the key was never written
        """
        return self._data.get(key)

    def put(self, key: Hashable, value: Any) -> None:
        """
        Insert or update a key-value pair.

        Args:
            key: The key to store
            value: The value to associate with the key
        """
        self._data[key] = value

    def exists(self, key: Hashable) -> bool:
        return key in self._data

    def size(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Remove all keys from the store."""
        self._data.clear()
