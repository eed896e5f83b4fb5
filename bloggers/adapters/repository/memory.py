"""
In-memory repository adapter - Implements the Collection protocol.

Records live in per-collection dicts guarded by one re-entrant lock shared
by the whole store, so every collection operation (including conditional
updates) is atomic. Used for development and tests.
"""

import copy
import logging
import threading
from collections.abc import Iterable

from bloggers.domain.exceptions import DuplicateRecord
from bloggers.domain.models import new_id
from bloggers.domain.ports import Filter, Record, Sort, UpdateResult

logger = logging.getLogger(__name__)


def _matches(record: Record, filter: Filter) -> bool:
    for name, value in filter.equals.items():
        if record.get(name) != value:
            return False
    if filter.contains_any:
        return any(
            term.casefold() in str(record.get(name, "")).casefold()
            for name, term in filter.contains_any.items()
        )
    return True


class InMemoryCollection:
    """
    Implements Collection protocol over a dict of records keyed by id.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Returned records are copies; callers never mutate stored state.
    """

    def __init__(self, name: str, lock: threading.RLock, unique: Iterable[str] = ()) -> None:
        self.name = name
        self._lock = lock
        self._unique = tuple(unique)
        self._records: dict[str, Record] = {}

    def find(
        self,
        filter: Filter,
        sort: Sort | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Record]:
        with self._lock:
            records = [r for r in self._records.values() if _matches(r, filter)]
            records.sort(key=lambda r: r["id"])
            if sort is not None:
                records.sort(
                    key=lambda r: (r.get(sort.field) is None, r.get(sort.field)),
                    reverse=sort.direction == "desc",
                )
            end = None if limit is None else skip + limit
            return copy.deepcopy(records[skip:end])

    def find_one(self, filter: Filter) -> Record | None:
        found = self.find(filter, limit=1)
        return found[0] if found else None

    def count(self, filter: Filter) -> int:
        with self._lock:
            return sum(1 for r in self._records.values() if _matches(r, filter))

    def insert(self, record: Record) -> str:
        with self._lock:
            for name in self._unique:
                if any(r.get(name) == record.get(name) for r in self._records.values()):
                    raise DuplicateRecord(name)
            id = new_id()
            while id in self._records:
                id = new_id()
            self._records[id] = {**copy.deepcopy(record), "id": id}
            return id

    def find_by_id(self, id: str) -> Record | None:
        with self._lock:
            record = self._records.get(id)
            return copy.deepcopy(record) if record is not None else None

    def update_by_id(self, id: str, patch: Record) -> UpdateResult:
        return self.update_where(Filter(equals={"id": id}), patch)

    def update_where(self, filter: Filter, patch: Record) -> UpdateResult:
        with self._lock:
            matched = modified = 0
            for record in self._records.values():
                if not _matches(record, filter):
                    continue
                matched += 1
                if any(record.get(name) != value for name, value in patch.items()):
                    modified += 1
                    record.update(copy.deepcopy(patch))
            return UpdateResult(matched_count=matched, modified_count=modified)

    def delete_by_id(self, id: str) -> int:
        with self._lock:
            return 1 if self._records.pop(id, None) is not None else 0

    def delete_where(self, filter: Filter) -> int:
        with self._lock:
            doomed = [id for id, r in self._records.items() if _matches(r, filter)]
            for id in doomed:
                del self._records[id]
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class InMemoryStore:
    """Named in-memory collections sharing one lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, InMemoryCollection] = {}

    def collection(self, name: str, unique: Iterable[str] = ()) -> InMemoryCollection:
        with self._lock:
            if name not in self._collections:
                self._collections[name] = InMemoryCollection(name, self._lock, unique)
            return self._collections[name]

    def close(self) -> None:
        logger.info("In-memory store released")
