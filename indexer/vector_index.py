"""Index synchronization between a document corpus and a vector collection.

VectorIndex keeps a named collection consistent with the files fed to it:
- Collection lifecycle (create-if-absent, delete)
- Embed and upsert all sections of a file in one batch
- Delete all sections of a file by sourcefile filter

add_to_index and delete_from_index expect the collection to exist; call
ensure_search_index first. Against a missing collection they fail with
CollectionNotFoundError.
"""

import logging
import time
from typing import Optional

from config.settings import Settings, get_settings
from indexer.embeddings import GeminiEmbeddingProvider
from indexer.errors import (
    CollectionAlreadyExistsError,
    CollectionMismatchError,
    CollectionNotFoundError,
    EmbeddingError,
    ValidationError,
)
from indexer.interfaces import DocumentConverter, EmbeddingProvider, VectorStoreClient
from indexer.models import COSINE, IndexedFile
from indexer.qdrant_store import QdrantVectorStore

logger = logging.getLogger(__name__)

SOURCEFILE_FIELD = "sourcefile"


def _require(value: Optional[str], field: str) -> str:
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    return value


class VectorIndex:
    """Synchronizes document sections with a remote vector collection."""

    def __init__(
        self,
        store: VectorStoreClient,
        embedding_provider: EmbeddingProvider,
        converter: DocumentConverter,
    ) -> None:
        """Initialize with injected collaborators.

        Args:
            store: Transport to the vector database, shared per process.
            embedding_provider: Computes section vectors.
            converter: Turns raw files into sections.
        """
        self._store = store
        self._embedding_provider = embedding_provider
        self._converter = converter

    async def ensure_search_index(self, index_name: str) -> None:
        """Create the collection if it doesn't exist.

        Safe to call repeatedly and concurrently. A concurrent creator
        winning the race is treated as success.

        Raises:
            CollectionMismatchError: If the collection exists with another
                vector size or a non-cosine distance.
        """
        _require(index_name, "index_name")
        try:
            info = await self._store.get_collection(index_name)
        except CollectionNotFoundError:
            vector_size = self._embedding_provider.dimensionality
            logger.info(
                "Creating search index %s (size=%d, distance=%s)",
                index_name, vector_size, COSINE,
            )
            try:
                await self._store.create_collection(index_name, vector_size, COSINE)
            except CollectionAlreadyExistsError:
                logger.debug("Search index %s was created concurrently", index_name)
            return

        logger.debug("Search index %s already exists", index_name)
        expected = self._embedding_provider.dimensionality
        if info.vector_size != expected:
            raise CollectionMismatchError(index_name, "vector_size", expected, info.vector_size)
        if info.distance != COSINE:
            raise CollectionMismatchError(index_name, "distance", COSINE, info.distance)

    async def add_to_index(self, index_name: str, file: IndexedFile) -> None:
        """Embed all sections of a file and upsert them in one batch.

        Sections are keyed by id, so re-indexing a file overwrites its
        previous points instead of duplicating them.

        Raises:
            ConversionError: If the file cannot be converted.
            EmbeddingError: If any section could not be embedded. Nothing
                is upserted in that case.
            CollectionNotFoundError: If the collection does not exist.
        """
        _require(index_name, "index_name")
        _require(file.filename, "filename")
        start_time = time.time()

        sections = await self._converter.convert(
            file.filename, file.data, file.type, file.category
        )
        if not sections:
            logger.info("No sections to index in file %s", file.filename)
            return

        embedded = await self._embedding_provider.embed_batch(sections)
        if len(embedded) != len(sections):
            raise EmbeddingError(
                f"Embedding returned {len(embedded)} sections for {len(sections)} "
                f"in file {file.filename}"
            )
        sections = embedded

        expected = self._embedding_provider.dimensionality
        for section in sections:
            if section.embedding is None:
                raise EmbeddingError(f"Section {section.id} has no embedding")
            if len(section.embedding) != expected:
                raise EmbeddingError(
                    f"Section {section.id} has {len(section.embedding)}-dimensional "
                    f"embedding, expected {expected}"
                )

        ids = [section.id for section in sections]
        vectors = [section.embedding for section in sections]
        payloads = [section.to_payload() for section in sections]

        await self._store.upsert(index_name, ids, vectors, payloads)

        duration_ms = int((time.time() - start_time) * 1000)
        logger.info(
            "Indexed %d sections from file %s in %dms",
            len(sections), file.filename, duration_ms,
        )

    async def delete_from_index(
        self, index_name: str, filename: Optional[str] = None
    ) -> None:
        """Delete all sections whose sourcefile is filename.

        Deleting a file that has no sections is a no-op.

        Raises:
            ValidationError: If filename is missing or empty.
        """
        _require(index_name, "index_name")
        _require(filename, "filename")
        await self._store.delete_by_filter(index_name, SOURCEFILE_FIELD, filename)
        logger.info("Deleted sections of file %s from %s", filename, index_name)

    async def delete_search_index(self, index_name: str) -> None:
        """Delete the collection and everything in it.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
        """
        _require(index_name, "index_name")
        await self._store.delete_collection(index_name)
        logger.info("Deleted search index %s", index_name)


def build_vector_index(
    converter: DocumentConverter, settings: Optional[Settings] = None
) -> VectorIndex:
    """Wire a VectorIndex to Qdrant and Gemini from settings.

    Create once at startup and share it; the Qdrant client it holds is a
    process-scoped resource.
    """
    settings = settings or get_settings()
    return VectorIndex(
        store=QdrantVectorStore.from_settings(settings),
        embedding_provider=GeminiEmbeddingProvider(settings),
        converter=converter,
    )
