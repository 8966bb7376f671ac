"""
In-memory record store backing the stub API.

One ``ResourceStore`` holds every resource collection.  Ids come from a
per-resource counter starting at 1 and are never reused, so a deleted id
stays unknown.  The stub is served from a background thread, hence the
lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any


@dataclass
class StoredRecord:
    """A record as held by the stub."""

    id: int
    name: str

    def to_dict(self, include_id: bool = True) -> dict[str, Any]:
        """
        Serialize for a JSON response.

        The fetch-by-id endpoint omits the id, matching the remote API.
        """
        if include_id:
            return {"id": self.id, "name": self.name}
        return {"name": self.name}


class ResourceStore:
    """Thread-safe collections of records keyed by resource name."""

    def __init__(self, resources: tuple[str, ...]):
        self._lock = threading.Lock()
        self._records: dict[str, dict[int, StoredRecord]] = {name: {} for name in resources}
        self._next_ids: dict[str, int] = {name: 1 for name in resources}

    def __contains__(self, resource: str) -> bool:
        return resource in self._records

    def list(self, resource: str) -> list[StoredRecord]:
        with self._lock:
            return list(self._records[resource].values())

    def get(self, resource: str, record_id: int) -> StoredRecord | None:
        with self._lock:
            return self._records[resource].get(record_id)

    def add(self, resource: str, name: str) -> StoredRecord:
        with self._lock:
            record_id = self._next_ids[resource]
            self._next_ids[resource] = record_id + 1
            record = StoredRecord(id=record_id, name=name)
            self._records[resource][record_id] = record
            return record

    def remove(self, resource: str, record_id: int) -> bool:
        """Delete a record, returning False if it did not exist."""
        with self._lock:
            return self._records[resource].pop(record_id, None) is not None

    def reset(self) -> None:
        """Drop every record and restart the id counters."""
        with self._lock:
            for resource in self._records:
                self._records[resource].clear()
                self._next_ids[resource] = 1
