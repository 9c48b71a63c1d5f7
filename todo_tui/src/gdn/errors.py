from __future__ import annotations


class GdnError(Exception):
    """Base class for application errors."""


# PUBLIC_INTERFACE
class StorageError(GdnError):
    """
    Raised when the storage engine fails (I/O, constraint violation,
    closed handle, corrupt file).
    """


# PUBLIC_INTERFACE
class DataDirNotFoundError(GdnError, FileNotFoundError):
    """Raised when no writable data directory can be resolved or created."""
