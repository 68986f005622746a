"""Errors raised by the local persistence layer."""


class StorageError(Exception):
    """A profile, favorites or device read/write failed.

    Non-fatal: callers surface it as a warning and keep running.
    """

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation


class StorageInitializationError(StorageError):
    """The local schema could not be created at startup. Fatal."""
