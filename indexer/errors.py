"""Typed errors for index synchronization.

Adapters translate third-party exceptions into these classes at the
boundary, so callers can branch on the error type instead of its message.
"""

from typing import Optional


class IndexSyncError(Exception):
    """Base class for all index sync failures."""


class CollectionNotFoundError(IndexSyncError):
    """The named collection does not exist in the vector store."""

    def __init__(self, index_name: str) -> None:
        super().__init__(f"Collection not found: {index_name}")
        self.index_name = index_name


class CollectionAlreadyExistsError(IndexSyncError):
    """A create request hit a collection that already exists."""

    def __init__(self, index_name: str) -> None:
        super().__init__(f"Collection already exists: {index_name}")
        self.index_name = index_name


class CollectionMismatchError(IndexSyncError):
    """An existing collection was created with other vector parameters.

    Attributes:
        field: "vector_size" or "distance".
        expected: Value the embedding provider requires.
        actual: Value the collection was created with.
    """

    def __init__(self, index_name: str, field: str, expected: object, actual: object) -> None:
        super().__init__(
            f"Collection {index_name} has {field} {actual}, expected {expected}"
        )
        self.index_name = index_name
        self.field = field
        self.expected = expected
        self.actual = actual


class ConfigurationError(IndexSyncError):
    """A required setting is missing."""


class ValidationError(IndexSyncError):
    """A required argument is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class ConversionError(IndexSyncError):
    """The document converter could not turn a file into sections."""

    def __init__(self, message: str, filename: Optional[str] = None) -> None:
        super().__init__(message)
        self.filename = filename


class EmbeddingError(IndexSyncError):
    """The embedding provider failed or returned unusable vectors."""


class TransportError(IndexSyncError):
    """Network, auth, quota or protocol failure talking to the vector store.

    Attributes:
        status_code: HTTP status when the store answered, None otherwise.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
