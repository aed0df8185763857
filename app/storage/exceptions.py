class StorageError(Exception):
    """Raised when an object store operation fails."""


class StorageNetworkError(StorageError):
    """Raised on timeouts, connection failures and transient server errors."""


class StorageAuthError(StorageError):
    """Raised when service-account credentials are missing or rejected."""


class StorageNotFoundError(StorageError):
    """Raised when the object store has no object with the given id."""
