"""Many-to-many join records (user <-> skill, gig <-> skill)."""
from __future__ import annotations

from typing import Generic

from .tables import InsertResult, R, Table


class RelationshipIndex(Generic[R]):
    """Flat collection of ``{a, b}`` join records, queried by linear scan.

    ``a_field`` / ``b_field`` name the two foreign-key attributes on the join
    model, e.g. ``("user_id", "skill_id")``.
    """

    def __init__(self, table: Table[R], a_field: str, b_field: str) -> None:
        self.table = table
        self.a_field = a_field
        self.b_field = b_field

    def __len__(self) -> int:
        return len(self.table)

    def _is_pair(self, a_id: int, b_id: int):
        return lambda r: getattr(r, self.a_field) == a_id and getattr(r, self.b_field) == b_id

    def add(self, a_id: int, b_id: int) -> InsertResult[R]:
        return self.table.insert_unless(
            self._is_pair(a_id, b_id), **{self.a_field: a_id, self.b_field: b_id}
        )

    def remove(self, a_id: int, b_id: int) -> bool:
        with self.table.lock:
            row = self.table.find(self._is_pair(a_id, b_id))
            if row is None:
                return False
            return self.table.delete(row.id)

    def get(self, a_id: int, b_id: int) -> R | None:
        return self.table.find(self._is_pair(a_id, b_id))

    def list_by_a(self, a_id: int) -> list[R]:
        return self.table.filter(lambda r: getattr(r, self.a_field) == a_id)

    def list_by_b(self, b_id: int) -> list[R]:
        return self.table.filter(lambda r: getattr(r, self.b_field) == b_id)
