"""
Namespace definitions for the auxiliary store.

Each namespace is an independent LevelDB directory below the network's
data directory. The directory names are fixed and must not change, since
they address data written by earlier releases.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ENGINE_TYPE = "leveldb"
"""Engine suffix appended to every namespace directory."""


@dataclass(frozen=True, slots=True)
class NamespaceDescriptor:
    """
    Static description of a namespace.

    The on-disk directory is `<prefix>_<engine_type>`.
    """

    prefix: str
    """Name of the dataset, e.g. "usercheckpoints"."""

    engine_type: str = DEFAULT_ENGINE_TYPE
    """Name of the storage engine."""

    @property
    def dir_name(self) -> str:
        """Directory name below `<dataRoot>/<networkDirName>`."""
        return f"{self.prefix}_{self.engine_type}"


USER_CHECKPOINTS = NamespaceDescriptor("usercheckpoints")
"""User supplied checkpoints: height -> block hash."""

VOLATILE_CHECKPOINTS = NamespaceDescriptor("volatilecheckpoints")
"""Session checkpoints, cleared in bulk: height -> block hash."""

ALERT_KEYS = NamespaceDescriptor("alertkey")
"""Alert key revocation flags: public key -> "true" / "false"."""

DENY_ADDRESSES = NamespaceDescriptor("denyaddress")
"""Deny-listed addresses: address -> "0"."""

ALL_NAMESPACES = [USER_CHECKPOINTS, VOLATILE_CHECKPOINTS, ALERT_KEYS, DENY_ADDRESSES]
"""All namespace definitions."""
