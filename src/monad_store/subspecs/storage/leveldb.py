"""
LevelDB backed namespace store.

Each store owns one plyvel handle on its namespace directory. Opening is
idempotent and closing resets the handle, so a store can be reopened.

LevelDB serialises concurrent reads and writes on one handle internally.
Only open and close are guarded here, since they swap the handle itself.
An operation that loses a race with close_db raises StoreClosedError.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import ClassVar, Self

import plyvel

from monad_store.subspecs.metrics import store_opens, store_write_errors, store_writes
from monad_store.subspecs.node import NodeConfig
from monad_store.types import StoreClosedError, StoreOpenError, StoreReadError, StoreWriteError

from .namespaces import NamespaceDescriptor
from .paths import namespace_path

logger = logging.getLogger(__name__)


class LevelDBStore:
    """
    Base class of the four namespace stores.

    Subclasses set `namespace` and add their own typed operations on top of
    the raw `_put`, `_delete` and `_get` helpers.
    """

    namespace: ClassVar[NamespaceDescriptor]
    """Static description of the namespace."""

    def __init__(self, config: NodeConfig) -> None:
        """
        Initialize a closed store.

        Args:
            config: Loaded configuration. Selects the network and data root
                the namespace path is derived from on open.
        """
        self._config = config
        self._db: plyvel.DB | None = None
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Directory name of the namespace, used in logs and errors."""
        return self.namespace.dir_name

    @property
    def path(self) -> Path:
        """Directory of the namespace for the loaded configuration."""
        return namespace_path(self.namespace, self._config)

    @property
    def is_open(self) -> bool:
        """Whether the handle is currently open."""
        return self._db is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def open_db(self) -> None:
        """
        Open or create the namespace directory.

        Does nothing if the store is already open.

        Raises:
            StoreOpenError: If the directory cannot be created or the engine
                refuses to open it (lock held by another process, corruption,
                permissions). Not retried.
        """
        with self._lock:
            if self._db is not None:
                return

            path = self.path

            # LevelDB only creates the last path component.
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                self._db = plyvel.DB(str(path), create_if_missing=True)
            except (OSError, plyvel.Error) as e:
                raise StoreOpenError(path, e) from e

        store_opens.labels(namespace=self.name).inc()
        logger.info("Opened %s at %s", self.name, path)

    def close_db(self) -> None:
        """
        Flush and release the handle.

        Does nothing if the store is not open. Safe to call repeatedly.
        """
        with self._lock:
            db, self._db = self._db, None
            if db is None:
                return
            db.close()

        logger.info("Closed %s", self.name)

    def __enter__(self) -> Self:
        """Context manager entry. Opens the store."""
        self.open_db()
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit. Closes the store."""
        self.close_db()

    # -------------------------------------------------------------------------
    # Raw Operations
    # -------------------------------------------------------------------------

    def _handle(self, operation: str) -> plyvel.DB:
        db = self._db
        if db is None:
            raise StoreClosedError(self.name, operation)
        return db

    def _check_closed(self, db: plyvel.DB, operation: str, error: RuntimeError) -> None:
        # plyvel raises a bare RuntimeError when close_db wins a race with an operation.
        if self._db is not db:
            raise StoreClosedError(self.name, operation) from error

    def _put(self, key: bytes, value: bytes) -> None:
        db = self._handle("put")
        try:
            db.put(key, value)
        except plyvel.Error as e:
            store_write_errors.labels(namespace=self.name).inc()
            raise StoreWriteError(self.name, "put", key, e) from e
        except RuntimeError as e:
            self._check_closed(db, "put", e)
            raise
        store_writes.labels(namespace=self.name, operation="put").inc()

    def _delete(self, key: bytes) -> None:
        db = self._handle("delete")
        try:
            db.delete(key)
        except plyvel.Error as e:
            store_write_errors.labels(namespace=self.name).inc()
            raise StoreWriteError(self.name, "delete", key, e) from e
        except RuntimeError as e:
            self._check_closed(db, "delete", e)
            raise
        store_writes.labels(namespace=self.name, operation="delete").inc()

    def _get(self, key: bytes) -> bytes | None:
        db = self._handle("get")
        try:
            return db.get(key)
        except plyvel.Error as e:
            raise StoreReadError(self.name, key, e) from e
        except RuntimeError as e:
            self._check_closed(db, "get", e)
            raise

    def entries(self) -> Iterator[tuple[bytes, bytes]]:
        """
        Iterate all raw key/value pairs in key order.

        The iterator reads from a snapshot taken when iteration starts.

        Raises:
            StoreClosedError: If the store is not open, or is closed while
                iterating.
            StoreReadError: If the engine fails while iterating.
        """
        db = self._handle("iterate")
        try:
            with db.iterator() as it:
                yield from it
        except plyvel.Error as e:
            raise StoreReadError(self.name, None, e) from e
        except RuntimeError as e:
            self._check_closed(db, "iterate", e)
            raise
