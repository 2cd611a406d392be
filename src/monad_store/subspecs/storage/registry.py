"""
Process-wide store registry.

The registry is an explicit context object created once at startup and
handed to every component that needs the auxiliary stores. It constructs
at most one instance per namespace, lazily, and hands out that same
instance to every caller.

Constructing a store deliberately waits `startup_delay` seconds before the
instance becomes visible. This throttles startup, giving a database lock
held by a previous process time to be released.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Generic, Self, TypeVar

from typing_extensions import Final

from monad_store.subspecs.node import NodeConfig

from .alert import AlertKeyStore
from .checkpoints import UserCheckpointStore, VolatileCheckpointStore
from .deny import DenyAddressStore
from .leveldb import LevelDBStore

logger = logging.getLogger(__name__)

STARTUP_DELAY_SECONDS: Final = 1.0
"""Delay incurred by the construction of each store."""

T = TypeVar("T")
StoreT = TypeVar("StoreT", bound=LevelDBStore)


class OnceCell(Generic[T]):
    """
    A value computed at most once, on first access.

    Concurrent first callers block until the single construction completes
    and then all observe the same instance. If the factory raises, the cell
    stays empty and the next access retries.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._value: T | None = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        """Whether the value has been constructed."""
        return self._value is not None

    def get(self) -> T:
        """Return the value, constructing it on first access."""
        value = self._value
        if value is not None:
            return value

        with self._lock:
            if self._value is None:
                self._value = self._factory()
            return self._value

    def peek(self) -> T | None:
        """Return the value if constructed, without constructing it."""
        return self._value


class StoreRegistry:
    """
    One lazily constructed instance of each namespace store.

    Stores come out closed; callers open them (idempotently) before use and
    the owner closes them at shutdown with `close_all`.
    """

    def __init__(
        self,
        config: NodeConfig,
        *,
        startup_delay: float = STARTUP_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize an empty registry.

        Args:
            config: Loaded configuration shared by every store.
            startup_delay: Seconds each store construction waits.
            sleep: Sleep function (injectable for testing).
        """
        self.config = config
        self.startup_delay = startup_delay
        self._sleep = sleep

        self._user_checkpoints = OnceCell(lambda: self._construct(UserCheckpointStore))
        self._volatile_checkpoints = OnceCell(lambda: self._construct(VolatileCheckpointStore))
        self._alert_keys = OnceCell(lambda: self._construct(AlertKeyStore))
        self._deny_addresses = OnceCell(lambda: self._construct(DenyAddressStore))

    def _construct(self, store_type: type[StoreT]) -> StoreT:
        if self.startup_delay > 0:
            self._sleep(self.startup_delay)
        logger.debug("Constructed %s", store_type.__name__)
        return store_type(self.config)

    def user_checkpoints(self) -> UserCheckpointStore:
        """The user checkpoint store."""
        return self._user_checkpoints.get()

    def volatile_checkpoints(self) -> VolatileCheckpointStore:
        """The volatile checkpoint store."""
        return self._volatile_checkpoints.get()

    def alert_keys(self) -> AlertKeyStore:
        """The alert key store."""
        return self._alert_keys.get()

    def deny_addresses(self) -> DenyAddressStore:
        """The deny-listed address store."""
        return self._deny_addresses.get()

    def _cells(self) -> list[OnceCell]:
        return [
            self._user_checkpoints,
            self._volatile_checkpoints,
            self._alert_keys,
            self._deny_addresses,
        ]

    def open_all(self) -> None:
        """
        Construct and open every store.

        Raises:
            StoreOpenError: On the first store that fails to open.
        """
        for cell in self._cells():
            cell.get().open_db()

    def close_all(self) -> None:
        """Close every store constructed so far."""
        for cell in self._cells():
            store: LevelDBStore | None = cell.peek()
            if store is not None:
                store.close_db()

    def __enter__(self) -> Self:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit. Closes every constructed store."""
        self.close_all()
