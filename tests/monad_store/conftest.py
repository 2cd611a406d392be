"""
Shared pytest fixtures for all monad_store tests.

Every fixture keeps its databases under pytest's tmp_path, so tests never
touch the real application home directory.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any, TypeVar

import plyvel
import pytest

from monad_store.subspecs.node import NodeConfig
from monad_store.subspecs.storage import (
    AlertKeyStore,
    DenyAddressStore,
    LevelDBStore,
    UserCheckpointStore,
    VolatileCheckpointStore,
)

S = TypeVar("S", bound=LevelDBStore)


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., NodeConfig]:
    """Factory for configs rooted in the test's temporary directory."""

    def _make(**overrides: Any) -> NodeConfig:
        values: dict[str, Any] = {
            "data_dir": tmp_path / "data",
            "config_file": tmp_path / "monad.yaml",
        }
        return NodeConfig(**(values | overrides))

    return _make


@pytest.fixture
def config(make_config: Callable[..., NodeConfig]) -> NodeConfig:
    """Mainnet config rooted in the test's temporary directory."""
    return make_config()


def _opened(store: S) -> Generator[S, None, None]:
    store.open_db()
    yield store
    store.close_db()


@pytest.fixture
def user_checkpoints(config: NodeConfig) -> Generator[UserCheckpointStore, None, None]:
    """An open user checkpoint store."""
    yield from _opened(UserCheckpointStore(config))


@pytest.fixture
def volatile_checkpoints(config: NodeConfig) -> Generator[VolatileCheckpointStore, None, None]:
    """An open volatile checkpoint store."""
    yield from _opened(VolatileCheckpointStore(config))


@pytest.fixture
def alert_keys(config: NodeConfig) -> Generator[AlertKeyStore, None, None]:
    """An open alert key store."""
    yield from _opened(AlertKeyStore(config))


@pytest.fixture
def deny_addresses(config: NodeConfig) -> Generator[DenyAddressStore, None, None]:
    """An open deny-list store."""
    yield from _opened(DenyAddressStore(config))


class FlakyDB:
    """
    Wraps an open plyvel handle and fails operations on demand.

    Iteration always goes to the real database.
    """

    def __init__(
        self,
        db: plyvel.DB,
        *,
        fail_puts: bool = False,
        fail_gets: bool = False,
        deletes_before_failure: int = -1,
    ):
        self._db = db
        self.fail_puts = fail_puts
        self.fail_gets = fail_gets
        self.deletes_before_failure = deletes_before_failure
        self.deletes = 0
        self.puts = 0

    def get(self, key: bytes) -> bytes | None:
        if self.fail_gets:
            raise plyvel.Error("simulated read failure")
        return self._db.get(key)

    def iterator(self, **kwargs: Any) -> Any:
        return self._db.iterator(**kwargs)

    def put(self, key: bytes, value: bytes) -> None:
        if self.fail_puts:
            raise plyvel.Error("simulated put failure")
        self._db.put(key, value)
        self.puts += 1

    def delete(self, key: bytes) -> None:
        if self.deletes == self.deletes_before_failure:
            raise plyvel.Error("simulated delete failure")
        self._db.delete(key)
        self.deletes += 1

    def close(self) -> None:
        self._db.close()


@pytest.fixture
def make_flaky() -> Callable[..., FlakyDB]:
    """Swap the handle of an open store for a FlakyDB wrapper."""

    def _make(store: LevelDBStore, **kwargs: Any) -> FlakyDB:
        assert store._db is not None
        flaky = FlakyDB(store._db, **kwargs)
        store._db = flaky  # type: ignore[assignment]
        return flaky

    return _make
