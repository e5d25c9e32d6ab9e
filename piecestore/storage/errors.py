class StorageError(Exception):
    """
    Base class for failures while setting up or using a storage root.

    Plain filesystem failures (missing piece file, disk full, permission
    denied on write) are not wrapped: they reach the caller as the builtin
    OSError family.

    Attributes:
        message -- explanation of the error
        path -- offending path, if known
    """

    def __init__(self, message, path=None):
        self.message = message
        self.path = path
        super().__init__(self.message)

    def __str__(self):
        if self.path is not None:
            return f"{self.message} (path={self.path})"
        return self.message


class PathError(StorageError):
    """A path exists but is not what the store expects, or cannot be stat'ed."""


class OwnershipError(StorageError, PermissionError):
    """A pre-existing storage root is owned by another user."""
