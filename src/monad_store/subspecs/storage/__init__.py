"""
Storage module for the auxiliary node data.

Four independent LevelDB namespaces: user checkpoints, volatile checkpoints,
alert key revocation flags and deny-listed addresses.
"""

from .alert import FLAG_NOT_REVOKED, FLAG_REVOKED, AlertKeyStore
from .checkpoints import NO_CHECKPOINT_HEIGHT, UserCheckpointStore, VolatileCheckpointStore
from .database import NamespaceStore
from .deny import DENY_SENTINEL, DenyAddressStore
from .encoding import HEIGHT_KEY_WIDTH, MAX_HEIGHT, decode_height, encode_height
from .leveldb import LevelDBStore
from .namespaces import (
    ALERT_KEYS,
    ALL_NAMESPACES,
    DENY_ADDRESSES,
    USER_CHECKPOINTS,
    VOLATILE_CHECKPOINTS,
    NamespaceDescriptor,
)
from .paths import namespace_path, net_name, resolve_path
from .registry import STARTUP_DELAY_SECONDS, OnceCell, StoreRegistry

__all__ = [
    # Namespaces
    "ALERT_KEYS",
    "ALL_NAMESPACES",
    "DENY_ADDRESSES",
    "USER_CHECKPOINTS",
    "VOLATILE_CHECKPOINTS",
    "NamespaceDescriptor",
    # Paths and keys
    "HEIGHT_KEY_WIDTH",
    "MAX_HEIGHT",
    "decode_height",
    "encode_height",
    "namespace_path",
    "net_name",
    "resolve_path",
    # Stores
    "AlertKeyStore",
    "DenyAddressStore",
    "LevelDBStore",
    "NamespaceStore",
    "UserCheckpointStore",
    "VolatileCheckpointStore",
    "DENY_SENTINEL",
    "FLAG_NOT_REVOKED",
    "FLAG_REVOKED",
    "NO_CHECKPOINT_HEIGHT",
    # Registry
    "OnceCell",
    "STARTUP_DELAY_SECONDS",
    "StoreRegistry",
]
