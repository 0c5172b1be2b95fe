"""Binary layout of a store file.

    schemaColumnCount  u64
    per column         nameLength i32, name bytes, columnType i32
    rowCount           u64
    per row            primaryKey i32, then each column in schema order:
                       INTEGER -> i32, TEXT -> length i32 + bytes

Native byte order, standard sizes, no version tag. Strings are UTF-8.
"""
import struct
from typing import BinaryIO, Dict, Mapping

from .exceptions import IoFailure, SchemaMismatch
from .types import Column, ColumnType, Row, Schema

U64 = struct.Struct("=Q")
I32 = struct.Struct("=i")


def _write_text(fp: BinaryIO, text: str):
    data = text.encode("utf-8")
    fp.write(I32.pack(len(data)))
    fp.write(data)


def _read_exact(fp: BinaryIO, n: int) -> bytes:
    data = fp.read(n)
    if len(data) != n:
        raise IoFailure(f"Unexpected end of file: wanted {n} bytes, got {len(data)}")
    return data


def _read_i32(fp: BinaryIO) -> int:
    return I32.unpack(_read_exact(fp, I32.size))[0]


def _read_u64(fp: BinaryIO) -> int:
    return U64.unpack(_read_exact(fp, U64.size))[0]


def _read_text(fp: BinaryIO) -> str:
    length = _read_i32(fp)
    if length < 0:
        raise IoFailure(f"Negative string length {length}")
    raw = _read_exact(fp, length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise IoFailure(f"Invalid UTF-8 in string field: {e}") from e


def write_schema(fp: BinaryIO, schema: Schema):
    fp.write(U64.pack(len(schema)))
    for col in schema:
        _write_text(fp, col.name)
        fp.write(I32.pack(int(col.type)))


def read_schema(fp: BinaryIO) -> Schema:
    count = _read_u64(fp)
    columns = []
    for _ in range(count):
        name = _read_text(fp)
        code = _read_i32(fp)
        try:
            columns.append(Column(name, ColumnType(code)))
        except ValueError:
            raise SchemaMismatch(f"Unknown column type code {code} for column '{name}'")
    return Schema(columns)


def check_schema(fp: BinaryIO, schema: Schema):
    """Read the stored schema and compare it column by column with `schema`."""
    count = _read_u64(fp)
    if count != len(schema):
        raise SchemaMismatch(f"Schema mismatch: file has {count} columns, expected {len(schema)}")
    for i, col in enumerate(schema):
        name = _read_text(fp)
        code = _read_i32(fp)
        if name != col.name or code != int(col.type):
            raise SchemaMismatch(
                f"Schema mismatch at column {i}: file has ({name}, {code}), expected ({col.name}, {int(col.type)})"
            )


def write_rows(fp: BinaryIO, schema: Schema, rows: Mapping[int, Row]):
    fp.write(U64.pack(len(rows)))
    for key in sorted(rows):
        row = rows[key]
        fp.write(I32.pack(key))
        for col, value in zip(schema, row):
            if col.type == ColumnType.INTEGER:
                fp.write(I32.pack(value))
            else:
                _write_text(fp, value)


def read_rows(fp: BinaryIO, schema: Schema) -> Dict[int, Row]:
    count = _read_u64(fp)
    rows: Dict[int, Row] = {}
    for _ in range(count):
        key = _read_i32(fp)
        values = []
        for col in schema:
            if col.type == ColumnType.INTEGER:
                values.append(_read_i32(fp))
            else:
                values.append(_read_text(fp))
        if values[0] != key:
            raise SchemaMismatch(f"Stored key {key} does not match row key {values[0]}")
        rows[key] = tuple(values)
    return rows


def dump(fp: BinaryIO, schema: Schema, rows: Mapping[int, Row]):
    write_schema(fp, schema)
    write_rows(fp, schema, rows)


def load(fp: BinaryIO, schema: Schema) -> Dict[int, Row]:
    check_schema(fp, schema)
    return read_rows(fp, schema)
