"""
Checkpoint namespaces.

Both namespaces map a block height to a block hash. Keys use the fixed-width
encoding from `encoding`, so key order is height order.

- User checkpoints are added and deleted individually and queried for the
  highest recorded height.
- Volatile checkpoints are session data, set individually and cleared in bulk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import plyvel

from monad_store.subspecs.metrics import max_checkpoint_height
from monad_store.types import CheckpointKeyError, StoreReadError, StoreWriteError

from .encoding import decode_height, encode_height
from .leveldb import LevelDBStore
from .namespaces import USER_CHECKPOINTS, VOLATILE_CHECKPOINTS

logger = logging.getLogger(__name__)

NO_CHECKPOINT_HEIGHT = 0
"""Returned by the max height lookup when no checkpoint is recorded."""


class _CheckpointStore(LevelDBStore):
    """Height -> hash lookups shared by both checkpoint namespaces."""

    def get(self, height: int) -> str | None:
        """Return the block hash stored at a height, or None."""
        value = self._get(encode_height(height))
        if value is None:
            return None
        return value.decode("utf-8")

    def checkpoints(self) -> Iterator[tuple[int, str]]:
        """
        Iterate (height, hash) pairs in ascending height order.

        Raises:
            CheckpointKeyError: If a stored key is not a valid height.
        """
        for key, value in self.entries():
            yield decode_height(key), value.decode("utf-8")

    def _put_checkpoint(self, height: int, block_hash: str) -> None:
        self._put(encode_height(height), block_hash.encode("utf-8"))


class UserCheckpointStore(_CheckpointStore):
    """
    User supplied checkpoints.

    Height 0 is the sentinel for "no checkpoint", so it should not be
    recorded by callers relying on `get_max_checkpoint_height`.
    """

    namespace = USER_CHECKPOINTS

    def add(self, height: int, block_hash: str) -> None:
        """
        Record a checkpoint, replacing any hash already stored at the height.

        Raises:
            CheckpointKeyError: If the height is out of range.
            StoreClosedError: If the store is not open.
            StoreWriteError: If the engine rejects the write.
        """
        self._put_checkpoint(height, block_hash)

    def delete(self, height: int) -> None:
        """
        Remove the checkpoint at a height. Missing heights are not an error.

        Raises:
            CheckpointKeyError: If the height is out of range.
            StoreClosedError: If the store is not open.
            StoreWriteError: If the engine rejects the delete.
        """
        self._delete(encode_height(height))

    def get_max_checkpoint_height(self) -> int:
        """
        Return the highest recorded checkpoint height.

        Seeks to the last key, which is the highest height thanks to the
        fixed-width key encoding.

        Returns:
            The highest height, or 0 when the namespace is empty. A malformed
            last key also yields 0.
        """
        db = self._handle("get_max_checkpoint_height")
        try:
            with db.iterator(reverse=True, include_value=False) as it:
                key = next(it, None)
        except plyvel.Error as e:
            raise StoreReadError(self.name, None, e) from e

        height = NO_CHECKPOINT_HEIGHT
        if key is not None:
            try:
                height = decode_height(key)
            except CheckpointKeyError as e:
                logger.warning("Ignoring malformed checkpoint key in %s: %s", self.name, e)

        max_checkpoint_height.set(height)
        return height


class VolatileCheckpointStore(_CheckpointStore):
    """Session checkpoints, discarded together with `clear_db`."""

    namespace = VOLATILE_CHECKPOINTS

    def set(self, height: int, block_hash: str) -> None:
        """
        Record a checkpoint, replacing any hash already stored at the height.

        Raises:
            CheckpointKeyError: If the height is out of range.
            StoreClosedError: If the store is not open.
            StoreWriteError: If the engine rejects the write.
        """
        self._put_checkpoint(height, block_hash)

    def clear_db(self) -> int:
        """
        Delete every key in the namespace.

        Stops at the first failed delete. Keys deleted before the failure
        stay deleted; there is no rollback.

        Returns:
            Number of keys deleted.

        Raises:
            StoreClosedError: If the store is not open.
            StoreWriteError: On the first delete the engine rejects.
        """
        deleted = 0
        try:
            for key, _ in self.entries():
                self._delete(key)
                deleted += 1
        except StoreWriteError:
            logger.error("Clearing %s aborted after %d deletions", self.name, deleted)
            raise

        logger.info("Cleared %d volatile checkpoints", deleted)
        return deleted
