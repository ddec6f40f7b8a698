"""Exceptions raised at the document store boundary."""


class RagdeskError(Exception):
    """Base class for ragdesk errors."""


class SnapshotError(RagdeskError):
    """A snapshot failed structural validation and was not restored."""


class StorageError(RagdeskError):
    """The snapshot persistence backend could not read or write."""
