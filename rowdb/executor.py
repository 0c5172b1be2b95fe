import logging
from typing import Optional

from .catalog import Catalog
from .exceptions import NoSelection
from .parser import (
    ROW_COMMANDS,
    CreateDatabase,
    Delete,
    DropDatabase,
    Insert,
    Parser,
    Select,
    SelectAll,
    ShowDatabases,
    Update,
    UseDatabase,
)
from .storage import Table
from .types import DEFAULT_SCHEMA, Schema, format_row

logger = logging.getLogger(__name__)


class Executor:
    """Execute command lines against a Catalog.

    Every command does one catalog or store operation and returns the text
    to show the user. Errors propagate as `RowDBException` subclasses.
    """

    def __init__(self, base_dir: str = "data", schema: Schema = DEFAULT_SCHEMA, catalog: Optional[Catalog] = None):
        self.catalog = catalog or Catalog(base_dir=base_dir)
        self.schema = schema
        self.parser = Parser(schema)

    def execute(self, line: str) -> Optional[str]:
        cmd = self.parser.parse(line)
        if cmd is None:
            return None
        logger.debug("executing %r", cmd)
        if isinstance(cmd, ROW_COMMANDS):
            table = self._current()
            if isinstance(cmd, Insert):
                return self._exec_insert(table, cmd)
            if isinstance(cmd, Select):
                return self._exec_select(table, cmd)
            if isinstance(cmd, SelectAll):
                return self._exec_select_all(table)
            if isinstance(cmd, Update):
                return self._exec_update(table, cmd)
            if isinstance(cmd, Delete):
                return self._exec_delete(table, cmd)
        if isinstance(cmd, CreateDatabase):
            return self._exec_create(cmd)
        if isinstance(cmd, UseDatabase):
            return self._exec_use(cmd)
        if isinstance(cmd, ShowDatabases):
            return self._exec_show()
        if isinstance(cmd, DropDatabase):
            return self._exec_drop(cmd)
        raise ValueError("Unsupported command type")

    def shutdown(self):
        self.catalog.shutdown()

    def _current(self) -> Table:
        table = self.catalog.current
        if table is None:
            raise NoSelection("No database selected. Use 'CREATE DATABASE' or 'USE'")
        return table

    def _exec_create(self, cmd: CreateDatabase) -> str:
        self.catalog.create_store(cmd.name, self.schema)
        return f"Database '{cmd.name}' created and selected"

    def _exec_use(self, cmd: UseDatabase) -> str:
        self.catalog.select(cmd.name)
        return f"Switched to database '{cmd.name}'"

    def _exec_show(self) -> str:
        lines = ["Databases:"]
        for name, current in self.catalog.list():
            lines.append(f"  {name}" + (" (current)" if current else ""))
        return "\n".join(lines)

    def _exec_drop(self, cmd: DropDatabase) -> str:
        if self.catalog.drop(cmd.name):
            return f"Database '{cmd.name}' dropped. No database selected."
        return f"Database '{cmd.name}' dropped"

    def _exec_insert(self, table: Table, cmd: Insert) -> str:
        table.insert(cmd.values)
        return f"Inserted successfully into '{table.name}'"

    def _exec_select(self, table: Table, cmd: Select) -> str:
        return format_row(table.get(cmd.id))

    def _exec_select_all(self, table: Table) -> str:
        rows = table.scan()
        if not rows:
            return "(empty)"
        return "\n".join(format_row(r) for r in rows)

    def _exec_update(self, table: Table, cmd: Update) -> str:
        row = list(table.get(cmd.id))
        row[cmd.column] = cmd.value
        table.update(cmd.id, row)
        return f"Updated successfully in '{table.name}'"

    def _exec_delete(self, table: Table, cmd: Delete) -> str:
        table.remove(cmd.id)
        return f"Deleted successfully from '{table.name}'"
