import logging
import os
from typing import Dict, List, Optional, Tuple

from .exceptions import InvalidStoreName, IoFailure, StoreAlreadyExists, StoreNotFound
from .storage import Table
from .types import Schema

logger = logging.getLogger(__name__)

INDEXED_COLUMN = 1


class Catalog:
    """Registry of named stores and the currently selected one.

    Each store is backed by `<base_dir>/<name>.dat`. Stores are written back
    when dropped and once more, all together, by `shutdown()`.
    """

    def __init__(self, base_dir: str = "data"):
        self.base_dir = base_dir
        os.makedirs(self.base_dir, exist_ok=True)
        self._stores: Dict[str, Table] = {}
        self._current: Optional[str] = None
        self._closed = False

    def __contains__(self, name: str) -> bool:
        return name in self._stores

    def store_path(self, name: str) -> str:
        """Path of the file backing `name`, which must stay inside `base_dir`."""
        seps = [s for s in (os.sep, os.altsep) if s]
        if name in ("", ".", "..") or "\0" in name or any(s in name for s in seps):
            raise InvalidStoreName(f"Invalid database name: {name!r}")
        return os.path.join(self.base_dir, f"{name}.dat")

    @property
    def current(self) -> Optional[Table]:
        if self._current is None:
            return None
        return self._stores[self._current]

    @property
    def current_name(self) -> Optional[str]:
        return self._current

    def names(self) -> List[str]:
        return list(self._stores)

    def get(self, name: str) -> Table:
        try:
            return self._stores[name]
        except KeyError:
            raise StoreNotFound(f"Database '{name}' does not exist") from None

    def create_store(self, name: str, schema: Schema) -> Table:
        if name in self._stores:
            raise StoreAlreadyExists(f"Database '{name}' already exists")
        table = Table(name, schema, path=self.store_path(name))
        table.hydrate()
        table.create_index(INDEXED_COLUMN)
        self._stores[name] = table
        self._current = name
        logger.info("created store '%s' (%d rows)", name, len(table))
        return table

    def select(self, name: str) -> Table:
        table = self.get(name)
        self._current = name
        return table

    def drop(self, name: str) -> bool:
        """Persist and forget `name`. Returns True if it was the current store.
        The backing file is kept."""
        table = self.get(name)
        table.persist()
        del self._stores[name]
        was_current = self._current == name
        if was_current:
            self._current = None
        logger.info("dropped store '%s'", name)
        return was_current

    def list(self) -> List[Tuple[str, bool]]:
        return [(name, name == self._current) for name in self._stores]

    def shutdown(self):
        """Persist every store. Runs once; later calls do nothing.

        A failing store does not stop the others from being written. When any
        failed, IoFailure is raised afterwards naming all of them.
        """
        if self._closed:
            logger.debug("catalog already shut down")
            return
        self._closed = True
        failed = []
        for name, table in self._stores.items():
            try:
                table.persist()
            except IoFailure:
                logger.exception("failed to persist store '%s'", name)
                failed.append(name)
        if failed:
            raise IoFailure(f"Failed to persist: {', '.join(failed)}")
