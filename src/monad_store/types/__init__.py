"""Reusable type definitions for the auxiliary node store."""

from .base import StrictBaseModel
from .exceptions import (
    CheckpointKeyError,
    ConfigurationError,
    StoreClosedError,
    StoreError,
    StoreOpenError,
    StoreReadError,
    StoreWriteError,
)

__all__ = [
    "StrictBaseModel",
    # Exceptions
    "StoreError",
    "ConfigurationError",
    "StoreOpenError",
    "StoreClosedError",
    "StoreWriteError",
    "StoreReadError",
    "CheckpointKeyError",
]
