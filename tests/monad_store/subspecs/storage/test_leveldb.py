"""Tests for the shared open/close lifecycle of namespace stores."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from monad_store.subspecs.node import NodeConfig
from monad_store.subspecs.storage import (
    AlertKeyStore,
    DenyAddressStore,
    LevelDBStore,
    NamespaceStore,
    UserCheckpointStore,
    VolatileCheckpointStore,
)
from monad_store.types import StoreClosedError, StoreOpenError

STORE_TYPES = [UserCheckpointStore, VolatileCheckpointStore, AlertKeyStore, DenyAddressStore]


@pytest.mark.parametrize("store_type", STORE_TYPES)
class TestLifecycle:
    """Open and close semantics shared by all four stores."""

    def test_starts_closed(self, store_type: type[LevelDBStore], config: NodeConfig) -> None:
        """A new store has no handle."""
        store = store_type(config)
        assert not store.is_open

    def test_open_creates_directory(
        self, store_type: type[LevelDBStore], config: NodeConfig
    ) -> None:
        """Opening creates the namespace directory, including its parents."""
        store = store_type(config)
        store.open_db()
        try:
            assert store.is_open
            assert store.path.is_dir()
            assert store.path == config.data_dir / "mainnet" / store.namespace.dir_name
        finally:
            store.close_db()

    def test_open_is_idempotent(self, store_type: type[LevelDBStore], config: NodeConfig) -> None:
        """A second open keeps the same handle and does not fail."""
        store = store_type(config)
        store.open_db()
        try:
            handle = store._db
            store.open_db()
            assert store._db is handle
        finally:
            store.close_db()

    def test_close_is_idempotent(self, store_type: type[LevelDBStore], config: NodeConfig) -> None:
        """Closing twice, or without ever opening, is a no-op."""
        store = store_type(config)
        store.close_db()

        store.open_db()
        store.close_db()
        store.close_db()
        assert not store.is_open

    def test_reopen_after_close(self, store_type: type[LevelDBStore], config: NodeConfig) -> None:
        """A closed store can be opened again."""
        store = store_type(config)
        store.open_db()
        store.close_db()
        store.open_db()
        try:
            assert store.is_open
        finally:
            store.close_db()

    def test_context_manager(self, store_type: type[LevelDBStore], config: NodeConfig) -> None:
        """The store opens on entry and closes on exit."""
        with store_type(config) as store:
            assert store.is_open
        assert not store.is_open

    def test_satisfies_protocol(self, store_type: type[LevelDBStore], config: NodeConfig) -> None:
        """Each store provides the NamespaceStore lifecycle."""
        store: NamespaceStore = store_type(config)
        assert store.namespace is store_type.namespace


class TestOpenErrors:
    """Failures surfaced by open_db()."""

    def test_second_handle_on_same_path_fails(self, config: NodeConfig) -> None:
        """The engine's directory lock rejects a second handle instead of hanging."""
        first = UserCheckpointStore(config)
        second = UserCheckpointStore(config)
        first.open_db()
        try:
            with pytest.raises(StoreOpenError) as exc_info:
                second.open_db()
            assert exc_info.value.path == first.path
            assert exc_info.value.__cause__ is exc_info.value.cause
            assert not second.is_open
        finally:
            first.close_db()

    def test_unusable_data_dir(
        self, make_config: Callable[..., NodeConfig], tmp_path: Path
    ) -> None:
        """A data root that is a regular file cannot hold namespaces."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = DenyAddressStore(make_config(data_dir=blocker))

        with pytest.raises(StoreOpenError):
            store.open_db()
        assert not store.is_open


class TestClosedStore:
    """Operations on a store that was never opened."""

    def test_write_requires_open(self, config: NodeConfig) -> None:
        """Writes on a closed store raise StoreClosedError."""
        store = DenyAddressStore(config)
        with pytest.raises(StoreClosedError) as exc_info:
            store.set("addr")
        assert exc_info.value.namespace == "denyaddress_leveldb"

    def test_read_requires_open(self, config: NodeConfig) -> None:
        """Reads on a closed store raise StoreClosedError."""
        with pytest.raises(StoreClosedError):
            UserCheckpointStore(config).get_max_checkpoint_height()

    def test_iteration_requires_open(self, config: NodeConfig) -> None:
        """Iterating a closed store raises StoreClosedError."""
        with pytest.raises(StoreClosedError):
            list(VolatileCheckpointStore(config).entries())


class TestPersistence:
    """Data survives closing and reopening."""

    def test_data_survives_reopen(self, config: NodeConfig) -> None:
        """Values written before close are readable after reopen."""
        with UserCheckpointStore(config) as store:
            store.add(10, "hash10")

        with UserCheckpointStore(config) as store:
            assert store.get(10) == "hash10"

    def test_networks_are_isolated(self, make_config: Callable[..., NodeConfig]) -> None:
        """The same namespace on two networks uses two databases."""
        with UserCheckpointStore(make_config()) as mainnet:
            mainnet.add(10, "main")

        with UserCheckpointStore(make_config(testnet=True)) as testnet:
            assert testnet.get(10) is None
            assert testnet.path.parent.name == "testnet"


class TestConcurrentLifecycle:
    """open_db() and close_db() racing on one store."""

    THREADS = 8

    def _race(self, action: Callable[[], object]) -> list[Exception]:
        barrier = threading.Barrier(self.THREADS)
        errors: list[Exception] = []
        lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            try:
                action()
            except Exception as e:
                with lock:
                    errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(self.THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        return errors

    def test_concurrent_open_uses_one_handle(self, config: NodeConfig) -> None:
        """Racing openers share a single handle; the directory lock never trips."""
        store = UserCheckpointStore(config)
        handles: list[object] = []

        def open_and_record() -> None:
            store.open_db()
            handles.append(store._db)

        try:
            assert self._race(open_and_record) == []
            assert len(handles) == self.THREADS
            assert all(h is handles[0] for h in handles)
        finally:
            store.close_db()

    def test_concurrent_close(self, config: NodeConfig) -> None:
        """Racing closers release the handle exactly once and the store can reopen."""
        store = UserCheckpointStore(config)
        store.open_db()
        store.add(1, "one")

        assert self._race(store.close_db) == []
        assert not store.is_open

        with store:
            assert store.get(1) == "one"

    def test_operation_racing_close(self, config: NodeConfig) -> None:
        """An operation that reaches a handle closed underneath it reports a closed store."""
        store = DenyAddressStore(config)
        store.open_db()
        stale = store._db
        store.close_db()
        store._handle = lambda operation: stale  # type: ignore[method-assign]

        with pytest.raises(StoreClosedError) as exc_info:
            store.set("addr")
        assert exc_info.value.operation == "put"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

        with pytest.raises(StoreClosedError):
            store.has("addr")
        with pytest.raises(StoreClosedError):
            list(store.entries())
