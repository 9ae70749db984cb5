"""
Per-entity in-memory tables.

Each entity type lives in its own ``Table`` keyed by an integer id handed out
by a per-table counter that starts at 1 and is never rewound. Tables of one
store share a re-entrant lock, so a check-then-insert performed through
``insert_unless`` cannot interleave with another request's writes.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Callable, Generic, Iterator, NamedTuple, TypeVar

from . import models

R = TypeVar("R", bound=models.Record)


class InsertOutcome(str, Enum):
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class InsertResult(NamedTuple, Generic[R]):
    outcome: InsertOutcome
    record: R

    @property
    def inserted(self) -> bool:
        return self.outcome is InsertOutcome.INSERTED


class Table(Generic[R]):
    def __init__(self, model: type[R], lock: threading.RLock | None = None) -> None:
        self.model = model
        self.lock = lock or threading.RLock()
        self._rows: dict[int, R] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[R]:
        return iter(self.list())

    def create(self, **fields) -> R:
        with self.lock:
            record = self.model(id=self._next_id, **fields)
            self._next_id += 1
            self._rows[record.id] = record
            return record

    def get(self, record_id: int) -> R | None:
        return self._rows.get(record_id)

    def update(self, record_id: int, **fields) -> R | None:
        """Shallow-merge ``fields`` over the stored record; None if absent."""
        with self.lock:
            current = self._rows.get(record_id)
            if current is None:
                return None
            fields.pop("id", None)
            updated = current.model_copy(update=fields)
            self._rows[record_id] = updated
            return updated

    def delete(self, record_id: int) -> bool:
        with self.lock:
            return self._rows.pop(record_id, None) is not None

    def list(self) -> list[R]:
        with self.lock:
            return list(self._rows.values())

    def find(self, predicate: Callable[[R], bool]) -> R | None:
        with self.lock:
            return next((r for r in self._rows.values() if predicate(r)), None)

    def filter(self, predicate: Callable[[R], bool]) -> list[R]:
        with self.lock:
            return [r for r in self._rows.values() if predicate(r)]

    def insert_unless(self, exists: Callable[[R], bool], **fields) -> InsertResult[R]:
        """Insert unless a row matching ``exists`` is already present.

        Returns ALREADY_EXISTS together with the matching row in that case.
        """
        with self.lock:
            existing = self.find(exists)
            if existing is not None:
                return InsertResult(InsertOutcome.ALREADY_EXISTS, existing)
            return InsertResult(InsertOutcome.INSERTED, self.create(**fields))
