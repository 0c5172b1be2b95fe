import logging
import os
from typing import Dict, List, Optional, Sequence, Any

from . import codec
from .exceptions import (
    DuplicateKey,
    InvalidIndexColumn,
    IoFailure,
    KeyNotFound,
    PrimaryKeyImmutable,
)
from .index import Index
from .types import ColumnType, Row, Schema

logger = logging.getLogger(__name__)


class Table:
    """Represents a single store: schema, rows keyed by primary key, and at
    most one secondary index.

    Rows live in memory. `persist` writes the whole table to `path` in the
    binary format of `rowdb.codec`; `hydrate` reads it back.
    """

    def __init__(self, name: str, schema: Schema, path: Optional[str] = None):
        self.name = name
        self.schema = schema
        self.path = path
        self._rows: Dict[int, Row] = {}
        self.index: Optional[Index] = None

    def __len__(self):
        return len(self._rows)

    def __contains__(self, pk: int) -> bool:
        return pk in self._rows

    def _index_add(self, pk: int, row: Row):
        if self.index is not None:
            self.index.add(row[self.index.column], pk)

    def _index_remove(self, pk: int, row: Row):
        if self.index is not None:
            self.index.remove(row[self.index.column], pk)

    def insert(self, row: Sequence[Any]):
        record = self.schema.validate_row(row)
        pk = record[0]
        if pk in self._rows:
            raise DuplicateKey(f"Duplicate ID: {pk} already exists")
        self._rows[pk] = record
        self._index_add(pk, record)
        logger.debug("%s: inserted %r", self.name, record)

    def get(self, pk: int) -> Row:
        if pk not in self._rows:
            raise KeyNotFound(f"ID {pk} not found")
        return tuple(self._rows[pk])

    def scan(self) -> List[Row]:
        return [self._rows[pk] for pk in sorted(self._rows)]

    def update(self, pk: int, new_row: Sequence[Any]):
        if pk not in self._rows:
            raise KeyNotFound(f"ID {pk} not found")
        record = self.schema.validate_row(new_row)
        if record[0] != pk:
            raise PrimaryKeyImmutable(f"Cannot change primary key {pk} to {record[0]}")
        self._index_remove(pk, self._rows[pk])
        self._rows[pk] = record
        self._index_add(pk, record)
        logger.debug("%s: updated %r", self.name, record)

    def remove(self, pk: int) -> bool:
        row = self._rows.pop(pk, None)
        if row is None:
            return False
        self._index_remove(pk, row)
        logger.debug("%s: removed id %s", self.name, pk)
        return True

    def create_index(self, column: int):
        if not 0 < column < len(self.schema) or self.schema[column].type != ColumnType.TEXT:
            raise InvalidIndexColumn(f"Invalid column for indexing: {column}")
        index = Index(column)
        index.build(self._rows.items())
        self.index = index

    def select_by_index(self, value: str) -> List[Row]:
        if self.index is None:
            return []
        return [self._rows[pk] for pk in sorted(self.index.lookup(value))]

    def persist(self, path: Optional[str] = None):
        path = path or self.path
        if path is None:
            raise IoFailure(f"No file configured for store '{self.name}'")
        tmp = path + ".tmp"
        try:
            with open(tmp, "wb") as f:
                codec.dump(f, self.schema, self._rows)
            os.replace(tmp, path)
        except OSError as e:
            raise IoFailure(f"Cannot write '{path}': {e}") from e
        logger.info("%s: persisted %d rows to %s", self.name, len(self._rows), path)

    def hydrate(self, path: Optional[str] = None) -> bool:
        """Load rows from `path`. A missing file leaves the table empty and
        returns False. The current rows and index are replaced only when the
        whole file has been read."""
        path = path or self.path
        if path is None:
            raise IoFailure(f"No file configured for store '{self.name}'")
        try:
            with open(path, "rb") as f:
                rows = codec.load(f, self.schema)
        except FileNotFoundError:
            logger.debug("%s: no file at %s, starting empty", self.name, path)
            return False
        except OSError as e:
            raise IoFailure(f"Cannot read '{path}': {e}") from e
        self._rows = rows
        if self.index is not None:
            self.index.build(self._rows.items())
        logger.info("%s: loaded %d rows from %s", self.name, len(rows), path)
        return True
