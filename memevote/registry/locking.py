"""
Thread-safe registry wrapper.

Registry assumes one caller at a time. Hosts that call it from several
threads wrap the whole registry here: every operation, read or write,
holds the same lock, so no caller sees a half-applied create or vote.
"""

import threading
from typing import Any, Dict, Hashable, List, Optional

from .models import Record
from .registry import Registry


class SynchronizedRegistry:
    """Serialises every Registry operation through one re-entrant lock."""

    def __init__(self, registry: Registry = None):
        self.registry = registry if registry is not None else Registry()
        self._lock = threading.RLock()

    def create(self, caller: Hashable, title: str, url: str) -> int:
        with self._lock:
            return self.registry.create(caller, title, url)

    def vote_up(self, caller: Hashable, record_id: int) -> None:
        with self._lock:
            self.registry.vote_up(caller, record_id)

    def get_one(self, record_id: int) -> Optional[Record]:
        with self._lock:
            return self.registry.get_one(record_id)

    def list_range(self, from_id: int, limit: int) -> List[Record]:
        with self._lock:
            return self.registry.list_range(from_id, limit)

    def list_top_ranked(self, limit: int) -> List[Record]:
        with self._lock:
            return self.registry.list_top_ranked(limit)

    def has_voted(self, identity: Hashable, record_id: int) -> bool:
        with self._lock:
            return self.registry.has_voted(identity, record_id)

    def total_count(self) -> int:
        with self._lock:
            return self.registry.total_count()

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return self.registry.get_stats()
