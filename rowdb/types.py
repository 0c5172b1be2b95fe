from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, Sequence, Tuple, Union

from .exceptions import SchemaMismatch

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

Value = Union[int, str]
Row = Tuple[Value, ...]


class ColumnType(IntEnum):
    # numeric values are the on-disk type codes
    INTEGER = 0
    TEXT = 1


@dataclass(frozen=True)
class Column:
    name: str
    type: ColumnType


class Schema:
    """Ordered, immutable list of columns. Column 0 is the INTEGER primary key."""

    def __init__(self, columns: Iterable[Column]):
        self.columns: Tuple[Column, ...] = tuple(columns)
        if not self.columns:
            raise SchemaMismatch("Schema must have at least one column")
        if self.columns[0].type != ColumnType.INTEGER:
            raise SchemaMismatch("First column must be INTEGER for primary key")

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self):
        return iter(self.columns)

    def __getitem__(self, i: int) -> Column:
        return self.columns[i]

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, Schema) and self.columns == other.columns

    def __hash__(self) -> int:
        return hash(self.columns)

    def __repr__(self) -> str:
        cols = ", ".join(f"{c.name} {c.type.name}" for c in self.columns)
        return f"Schema({cols})"

    def validate_row(self, row: Sequence[Any]) -> Row:
        """Check arity and per-column types; return the row as a tuple.

        Values are never coerced: an INTEGER column takes an `int` (not a
        `bool`) that fits in 32 bits, a TEXT column takes a `str`.
        """
        if len(row) != len(self.columns):
            raise SchemaMismatch(
                f"Row size does not match schema: expected {len(self.columns)} values, got {len(row)}"
            )
        for col, value in zip(self.columns, row):
            check_value(value, col)
        return tuple(row)


def check_value(value: Any, column: Column):
    if column.type == ColumnType.INTEGER:
        if type(value) is not int:
            raise SchemaMismatch(f"Type mismatch in row: column '{column.name}' expects INTEGER, got {value!r}")
        if not INT32_MIN <= value <= INT32_MAX:
            raise SchemaMismatch(f"Value {value} for column '{column.name}' is out of INTEGER range")
    elif column.type == ColumnType.TEXT:
        if not isinstance(value, str):
            raise SchemaMismatch(f"Type mismatch in row: column '{column.name}' expects TEXT, got {value!r}")
    else:
        raise SchemaMismatch(f"Unknown column type: {column.type!r}")


def format_row(row: Sequence[Value]) -> str:
    return ", ".join(str(v) for v in row)


DEFAULT_SCHEMA = Schema([Column("id", ColumnType.INTEGER), Column("name", ColumnType.TEXT)])
