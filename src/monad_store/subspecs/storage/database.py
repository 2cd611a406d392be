"""
Lifecycle protocol shared by all namespace stores.

Uses structural subtyping - any class with matching methods satisfies the protocol.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .namespaces import NamespaceDescriptor


class NamespaceStore(Protocol):
    """
    Protocol for a store owning one lazily opened database handle.

    The handle is exclusively owned by the store. It is None until the
    first open and is reset to None by close, so a store can be reopened.
    """

    namespace: NamespaceDescriptor
    """Static description of the namespace."""

    @property
    def path(self) -> Path:
        """Directory the namespace lives in for the loaded configuration."""
        ...

    @property
    def is_open(self) -> bool:
        """Whether the handle is currently open."""
        ...

    def open_db(self) -> None:
        """
        Open or create the namespace directory.

        Does nothing if the store is already open.

        Raises:
            StoreOpenError: If the engine cannot open the directory.
        """
        ...

    def close_db(self) -> None:
        """
        Flush and release the handle.

        Does nothing if the store is not open. Safe to call repeatedly.
        """
        ...
