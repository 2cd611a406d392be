"""
Alert key revocation flags.

The legacy alert system trusts two public keys per network, a main key and
a sub key. Each has a flag in this namespace:

- b"false": the key has not been revoked
- b"true": the key has been revoked

Revocation is irreversible. There is deliberately no operation that turns a
flag back to b"false" once it has been set.
"""

from __future__ import annotations

import logging

from typing_extensions import Final

from monad_store.types import StoreReadError, StoreWriteError

from .leveldb import LevelDBStore
from .namespaces import ALERT_KEYS

logger = logging.getLogger(__name__)

FLAG_REVOKED: Final = b"true"
"""Stored for a revoked key."""

FLAG_NOT_REVOKED: Final = b"false"
"""Stored for a key that has not been revoked."""


def _key_bytes(key: bytes | str) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


class AlertKeyStore(LevelDBStore):
    """
    Revocation flags for the alert public keys.

    The keys checked by `is_valid` come from the active network's
    parameters (or their configured overrides).
    """

    namespace = ALERT_KEYS

    def set(self, key: bytes | str) -> None:
        """
        Mark an alert key as revoked. Irreversible.

        Raises:
            StoreClosedError: If the store is not open.
            StoreWriteError: If the engine rejects the write.
        """
        self._put(_key_bytes(key), FLAG_REVOKED)
        logger.warning("Alert key %s revoked", _key_bytes(key).hex())

    def get(self, key: bytes | str) -> bytes | None:
        """Return the raw flag stored for a key, or None if absent."""
        return self._get(_key_bytes(key))

    def is_valid(self) -> bool:
        """
        Check that neither alert key of the active network is revoked.

        Absent flags are written as b"false" first, so later reads see them.
        A failure of that write is logged and ignored. A flag that cannot be
        read counts as revoked and is left as stored.

        Returns:
            True if and only if both flags are exactly b"false".
        """
        params = self._config.net_params
        main = self._flag(params.alert_pub_main_key)
        sub = self._flag(params.alert_pub_sub_key)
        return main == FLAG_NOT_REVOKED and sub == FLAG_NOT_REVOKED

    def _flag(self, key: bytes) -> bytes | None:
        try:
            value = self._get(key)
        except StoreReadError as e:
            # Writing b"false" here could overwrite a revocation.
            logger.warning("Could not read alert key flag %s: %s", key.hex(), e)
            return None
        if value is not None:
            return value

        try:
            self._put(key, FLAG_NOT_REVOKED)
        except StoreWriteError as e:
            logger.warning("Could not initialize alert key flag %s: %s", key.hex(), e)
        return FLAG_NOT_REVOKED
