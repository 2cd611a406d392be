"""Deny-listed addresses. Presence of a key is the only information stored."""

from __future__ import annotations

from typing_extensions import Final

from .leveldb import LevelDBStore
from .namespaces import DENY_ADDRESSES

DENY_SENTINEL: Final = b"0"
"""Value stored for every deny-listed address."""


class DenyAddressStore(LevelDBStore):
    """Set of deny-listed addresses."""

    namespace = DENY_ADDRESSES

    def set(self, address: str) -> None:
        """
        Add an address to the deny list.

        Raises:
            StoreClosedError: If the store is not open.
            StoreWriteError: If the engine rejects the write.
        """
        self._put(address.encode("utf-8"), DENY_SENTINEL)

    def get(self, address: str) -> bytes | None:
        """Return the stored sentinel for an address, or None if not listed."""
        return self._get(address.encode("utf-8"))

    def has(self, address: str) -> bool:
        """Check whether an address is deny-listed."""
        return self.get(address) is not None
