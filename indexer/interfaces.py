"""Collaborator interfaces consumed by VectorIndex."""

from abc import ABC, abstractmethod
from typing import Any, Sequence, Union
from uuid import UUID

from indexer.models import COSINE, CollectionInfo, ContentSection


class EmbeddingProvider(ABC):
    """Computes vectors for content sections."""

    @property
    @abstractmethod
    def dimensionality(self) -> int:
        """Size of every vector this provider returns."""

    @abstractmethod
    async def embed_batch(
        self, sections: Sequence[ContentSection]
    ) -> list[ContentSection]:
        """Embed all sections in one logical batch.

        Args:
            sections: Sections whose content should be embedded.

        Returns:
            The sections, in the same order, with embedding set.

        Raises:
            EmbeddingError: If the provider fails for any section.
        """


class DocumentConverter(ABC):
    """Turns a raw file into ordered content sections."""

    @abstractmethod
    async def convert(
        self, filename: str, data: bytes, type: str, category: str
    ) -> list[ContentSection]:
        """Split a file into sections with stable ids and no embeddings.

        Raises:
            ConversionError: If the input cannot be parsed.
        """


class VectorStoreClient(ABC):
    """Thin transport to a remote vector database."""

    @abstractmethod
    async def get_collection(self, name: str) -> CollectionInfo:
        """Fetch collection metadata.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
            TransportError: On any other failure.
        """

    @abstractmethod
    async def create_collection(
        self, name: str, vector_size: int, distance: str = COSINE
    ) -> None:
        """Create a collection.

        Raises:
            CollectionAlreadyExistsError: If the collection already exists.
            TransportError: On any other failure.
        """

    @abstractmethod
    async def delete_collection(self, name: str) -> None:
        """Delete a collection and all its points.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
        """

    @abstractmethod
    async def upsert(
        self,
        name: str,
        ids: Sequence[Union[str, int, UUID]],
        vectors: Sequence[Sequence[float]],
        payloads: Sequence[dict[str, Any]],
    ) -> None:
        """Insert or replace points by id in a single batch."""

    @abstractmethod
    async def delete_by_filter(self, name: str, field: str, value: Any) -> None:
        """Delete every point whose payload field equals value."""
