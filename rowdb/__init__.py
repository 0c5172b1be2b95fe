from .catalog import Catalog
from .storage import Table
from .executor import Executor
from .parser import Parser
from .types import Column, ColumnType, Schema, DEFAULT_SCHEMA

__all__ = ["Catalog", "Table", "Executor", "Parser", "Column", "ColumnType", "Schema", "DEFAULT_SCHEMA"]
