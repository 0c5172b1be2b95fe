from typing import Dict, Iterable, Set, Tuple

from .types import Row


class Index:
    """In-memory hash index over one TEXT column: value -> set of primary keys."""

    def __init__(self, column: int):
        self.column = column
        self._map: Dict[str, Set[int]] = {}

    def __len__(self):
        return len(self._map)

    def __contains__(self, value: str) -> bool:
        return value in self._map

    def build(self, rows: Iterable[Tuple[int, Row]]):
        self._map = {}
        for pk, row in rows:
            self.add(row[self.column], pk)

    def add(self, value: str, pk: int):
        self._map.setdefault(value, set()).add(pk)

    def remove(self, value: str, pk: int):
        bucket = self._map.get(value)
        if bucket is None:
            return
        bucket.discard(pk)
        if not bucket:
            del self._map[value]

    def lookup(self, value: str) -> Set[int]:
        return set(self._map.get(value, set()))
