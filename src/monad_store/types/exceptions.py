"""Exception hierarchy for the auxiliary node store."""

from __future__ import annotations


class StoreError(Exception):
    """
    Base exception for all store-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(StoreError):
    """
    Raised when the node configuration cannot be loaded.

    Covers mutually exclusive network flags, unreadable or malformed
    config files and values that fail validation. Always raised before
    any database path is derived.
    """


class StoreOpenError(StoreError):
    """
    Raised when the embedded engine refuses to open a namespace.

    Attributes:
        path: Directory the engine was asked to open.
        cause: The engine (or filesystem) exception, unmodified.
    """

    def __init__(self, path: object, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to open database at {path}: {cause}")


class StoreClosedError(StoreError):
    """
    Raised when an operation needs an open handle but the store is closed.

    Attributes:
        namespace: Directory name of the namespace.
        operation: The operation that was attempted.
    """

    def __init__(self, namespace: str, operation: str) -> None:
        self.namespace = namespace
        self.operation = operation
        super().__init__(f"Cannot {operation} on {namespace}: database is not open")


class StoreWriteError(StoreError):
    """
    Raised when the engine rejects a put or delete.

    Attributes:
        namespace: Directory name of the namespace.
        operation: "put" or "delete".
        key: The raw key being written.
        cause: The engine exception.
    """

    def __init__(
        self,
        namespace: str,
        operation: str,
        key: bytes,
        cause: BaseException,
    ) -> None:
        self.namespace = namespace
        self.operation = operation
        self.key = key
        self.cause = cause
        super().__init__(f"{operation} of key {key!r} in {namespace} failed: {cause}")


class StoreReadError(StoreError):
    """
    Raised when the engine fails to read a key or iterate a namespace.

    Attributes:
        namespace: Directory name of the namespace.
        key: The raw key being read (None for iteration).
        cause: The engine exception.
    """

    def __init__(self, namespace: str, key: bytes | None, cause: BaseException) -> None:
        self.namespace = namespace
        self.key = key
        self.cause = cause
        target = "iteration" if key is None else f"read of key {key!r}"
        super().__init__(f"{target} in {namespace} failed: {cause}")


class CheckpointKeyError(StoreError, ValueError):
    """
    Raised when a checkpoint height cannot be encoded or a key cannot be decoded.

    Attributes:
        detail: Description of what went wrong.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid checkpoint key: {detail}")
