"""
Checkpoint key encoding.

Heights are stored as fixed-width, zero-padded decimal ASCII. With a fixed
width the byte order LevelDB sorts keys in equals numeric height order, so
the last key of a namespace is always its highest height.
"""

from __future__ import annotations

from typing_extensions import Final

from monad_store.types import CheckpointKeyError

HEIGHT_KEY_WIDTH: Final = 20
"""Digits per key. Wide enough for any signed 64-bit height."""

MAX_HEIGHT: Final = 2**63 - 1
"""Largest height representable by a signed 64-bit integer."""


def encode_height(height: int) -> bytes:
    """
    Encode a block height as a checkpoint key.

    Raises:
        CheckpointKeyError: If the height is negative or exceeds MAX_HEIGHT.
    """
    if isinstance(height, bool) or not isinstance(height, int):
        raise CheckpointKeyError(f"height must be an int, got {type(height).__name__}")
    if not 0 <= height <= MAX_HEIGHT:
        raise CheckpointKeyError(f"height {height} is outside [0, {MAX_HEIGHT}]")
    return f"{height:0{HEIGHT_KEY_WIDTH}d}".encode("ascii")


def decode_height(key: bytes) -> int:
    """
    Decode a checkpoint key back to a block height.

    Raises:
        CheckpointKeyError: If the key is not HEIGHT_KEY_WIDTH ASCII digits.
    """
    if len(key) != HEIGHT_KEY_WIDTH or not key.isdigit():
        raise CheckpointKeyError(f"malformed height key {key!r}")
    height = int(key)
    if height > MAX_HEIGHT:
        raise CheckpointKeyError(f"height key {key!r} exceeds {MAX_HEIGHT}")
    return height
